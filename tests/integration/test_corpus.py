"""The shipped skill corpus must lint clean without network access."""
import pytest

from skilldocs.config import Settings
from skilldocs.corpus.registry import SkillRegistry
from skilldocs.engine.linter import CorpusLinter


@pytest.fixture
def registry(repo_skills_dir):
    reg = SkillRegistry()
    reg.discover(repo_skills_dir)
    return reg


def test_corpus_loads(registry):
    assert registry.failures == []
    assert {"saloon", "laravel-adjacency-list"} <= {m.name for m in registry.list_all()}


@pytest.mark.asyncio
async def test_corpus_lints_clean_in_strict_mode(registry, tmp_path):
    settings = Settings(links_enabled=False, strict=True, output_dir=str(tmp_path))
    report = await CorpusLinter(settings).lint_registry(registry)
    assert report.passed, [c.detail for c in report.all_checks() if not c.passed]
    assert report.error_count == 0
    assert report.warning_count == 0


def test_every_skill_has_references(registry):
    for document in registry.documents():
        sections = [h.text for h in document.parsed.headings]
        assert "References" in sections, document.path
        assert any(link.section == "References" for link in document.parsed.links)


def test_saloon_is_found_by_agent_query(registry):
    matches = registry.match(agent="claude-code", tags=["php"], query="api integration")
    assert matches[0].name == "saloon"
