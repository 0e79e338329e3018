"""Tests for frontmatter quality checks."""
from skilldocs.corpus.models import Severity, SkillDocument, SkillMetadata
from skilldocs.engine.metadata_check import MetadataChecker


def _doc(**meta):
    meta.setdefault("name", "widget-client")
    return SkillDocument(path="skills/x/SKILL.md", metadata=SkillMetadata(**meta))


def _by_name(checks):
    return {c.name: c for c in checks}


class TestMetadataChecker:
    def test_complete_metadata_passes(self):
        checks = MetadataChecker().check(
            _doc(description="Does things", agents=["claude-code"], tags=["php"])
        )
        assert all(c.passed for c in checks)
        assert all(c.document == "skills/x/SKILL.md" for c in checks)

    def test_empty_description_is_error(self):
        checks = _by_name(MetadataChecker().check(_doc(description="   ", agents=["a"], tags=["t"])))
        assert not checks["metadata.description"].passed
        assert checks["metadata.description"].severity == Severity.ERROR

    def test_empty_name_is_error(self):
        checks = _by_name(MetadataChecker().check(_doc(name="", description="d", agents=["a"], tags=["t"])))
        assert not checks["metadata.name"].passed

    def test_name_format_warning(self):
        checks = _by_name(MetadataChecker().check(_doc(name="Widget_Client", description="d", agents=["a"], tags=["t"])))
        assert not checks["metadata.name_format"].passed
        assert checks["metadata.name_format"].severity == Severity.WARNING

    def test_missing_agents_and_tags(self):
        checks = _by_name(MetadataChecker().check(_doc(description="d")))
        assert not checks["metadata.agents"].passed
        assert not checks["metadata.tags"].passed

    def test_duplicate_tags(self):
        checks = _by_name(MetadataChecker().check(_doc(description="d", agents=["a"], tags=["php", "PHP"])))
        assert not checks["metadata.tags"].passed
        assert "Duplicate" in checks["metadata.tags"].detail
