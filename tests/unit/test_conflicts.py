"""Tests for corpus-wide conflict detection."""
from skilldocs.corpus.registry import SkillRegistry
from skilldocs.engine.conflicts import ConflictDetector, normalize_surface

HEADER = "---\nname: {name}\ndescription: d\nagents: [a]\ntags: [t]\n---\n"


def _registry(tmp_path, write_skill, docs):
    for name, body in docs.items():
        write_skill(name, HEADER.format(name=name) + body)
    registry = SkillRegistry()
    registry.discover(tmp_path / "skills")
    return registry


class TestConflictDetector:
    def test_opposite_guidance_across_documents(self, tmp_path, write_skill):
        registry = _registry(
            tmp_path,
            write_skill,
            {
                "alpha": "# A\n\nAlways call `$connector->send($request)` to dispatch.\n",
                "beta": "# B\n\nNever call `$connector->send()` directly.\n",
            },
        )
        checks = ConflictDetector().check(registry)
        assert len(checks) == 1
        conflict = checks[0]
        assert conflict.name == "conflict.guidance"
        assert not conflict.passed
        assert "$connector->send" in conflict.detail
        assert conflict.document.endswith("beta/SKILL.md")
        assert conflict.line == 9

    def test_same_document_is_not_a_conflict(self, tmp_path, write_skill):
        registry = _registry(
            tmp_path,
            write_skill,
            {"alpha": "Use `tree()` for small tables.\nAvoid `tree()` on huge tables.\n"},
        )
        assert ConflictDetector().check(registry) == []

    def test_agreeing_guidance(self, tmp_path, write_skill):
        registry = _registry(
            tmp_path,
            write_skill,
            {
                "alpha": "Prefer `defaultAuth()` on connectors.\n",
                "beta": "Always use `defaultAuth()`.\n",
            },
        )
        assert ConflictDetector().check(registry) == []

    def test_instead_of_flips_polarity(self, tmp_path, write_skill):
        registry = _registry(
            tmp_path,
            write_skill,
            {
                "alpha": "Use `toTree()` instead of `nest()`.\n",
                "beta": "You should call `nest()` after loading.\n",
            },
        )
        checks = ConflictDetector().check(registry)
        assert [c.name for c in checks] == ["conflict.guidance"]
        assert "`nest`" in checks[0].detail

    def test_duplicate_names(self, tmp_path, write_skill):
        write_skill("one", HEADER.format(name="same") + "# One\n")
        write_skill("two", HEADER.format(name="same") + "# Two\n")
        registry = SkillRegistry()
        registry.discover(tmp_path / "skills")
        checks = ConflictDetector().check(registry)
        assert [c.name for c in checks] == ["conflict.duplicate_name"]
        assert "same" in checks[0].detail

    def test_repository_corpus_has_no_conflicts(self, repo_skills_dir):
        registry = SkillRegistry()
        registry.discover(repo_skills_dir)
        assert ConflictDetector().check(registry) == []


def test_normalize_surface():
    assert normalize_surface("->send($request);") == "->send"
    assert normalize_surface("Category::tree()") == "category::tree"
    assert normalize_surface("foo(bar)->baz()") == "foo(bar)->baz"
    assert normalize_surface("  HasBody ") == "hasbody"
