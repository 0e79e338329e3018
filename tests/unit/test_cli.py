import json

import pytest
from typer.testing import CliRunner

from skilldocs.cli import app

runner = CliRunner()


@pytest.fixture
def broken_dir(tmp_path, write_skill):
    root = tmp_path / "broken-skills"
    write_skill(
        "bad-json",
        "---\nname: bad-json\ndescription: d\nagents: [a]\ntags: [t]\n---\n```json\n{\"a\": 1,}\n```\n",
        root=root,
    )
    return root


class TestListCommand:
    def test_json(self, skills_dir):
        result = runner.invoke(app, ["list", "--path", str(skills_dir), "--json"])
        assert result.exit_code == 0
        names = [s["name"] for s in json.loads(result.stdout)["skills"]]
        assert names == ["gadget-tree", "widget-client"]

    def test_agent_filter(self, skills_dir):
        result = runner.invoke(app, ["list", "--path", str(skills_dir), "--agent", "cursor"])
        assert result.exit_code == 0
        assert "widget-client  [php, http]" in result.stdout
        assert "gadget-tree" not in result.stdout

    def test_tag_filter(self, skills_dir):
        result = runner.invoke(app, ["list", "--path", str(skills_dir), "--tag", "tree"])
        assert "gadget-tree  [php, tree]" in result.stdout
        assert "widget-client" not in result.stdout

    def test_no_match(self, skills_dir):
        result = runner.invoke(app, ["list", "--path", str(skills_dir), "-q", "kubernetes"])
        assert result.exit_code == 0
        assert "No matching skills." in result.stdout


class TestShowCommand:
    def test_show(self, skills_dir):
        result = runner.invoke(app, ["show", "widget-client", "--path", str(skills_dir)])
        assert result.exit_code == 0
        assert "name:        widget-client" in result.stdout
        assert "packages:    acme/widget-client" in result.stdout
        assert "- Widget client" in result.stdout
        assert "  - Usage" in result.stdout

    def test_missing(self, skills_dir):
        result = runner.invoke(app, ["show", "nope", "--path", str(skills_dir)])
        assert result.exit_code == 2


class TestLintCommand:
    def test_repo_corpus_is_clean(self, repo_skills_dir):
        result = runner.invoke(app, ["lint", str(repo_skills_dir), "--no-links"])
        assert result.exit_code == 0, result.output
        assert result.stdout.strip().endswith("passed")

    def test_failure_exit_code(self, broken_dir):
        result = runner.invoke(app, ["lint", str(broken_dir), "--no-links"])
        assert result.exit_code == 1
        assert "[syntax.code_block]" in result.stdout

    def test_file_argument_is_linted(self, write_skill, tmp_path):
        path = write_skill(
            "half-done",
            "---\nname: half-done\ndescription: \"\"\nagents: [a]\ntags: [t]\n---\n```php\n$x = [1;\n```\n",
            root=tmp_path / "drafts",
        )
        result = runner.invoke(app, ["lint", str(path), "--no-links"])
        assert result.exit_code == 1
        assert "[metadata.description]" in result.stdout
        assert "[syntax.code_block]" in result.stdout
        assert "1 document(s)" in result.stdout

    def test_missing_path_is_usage_error(self, tmp_path):
        result = runner.invoke(app, ["lint", str(tmp_path / "typo"), "--no-links"])
        assert result.exit_code == 2
        assert "passed" not in result.stdout

    def test_list_missing_path(self, tmp_path):
        result = runner.invoke(app, ["list", "--path", str(tmp_path / "typo")])
        assert result.exit_code == 2

    def test_json_format(self, skills_dir):
        result = runner.invoke(app, ["lint", str(skills_dir), "--no-links", "--format", "json"])
        assert result.exit_code == 0
        report = json.loads(result.stdout)
        assert report["passed"] is True
        assert report["total_documents"] == 2

    def test_unknown_format(self, skills_dir):
        result = runner.invoke(app, ["lint", str(skills_dir), "--format", "pdf"])
        assert result.exit_code == 2

    def test_output_dir(self, skills_dir, tmp_path):
        out = tmp_path / "reports"
        result = runner.invoke(
            app, ["lint", str(skills_dir), "--no-links", "--format", "markdown", "--output", str(out)]
        )
        assert result.exit_code == 0
        written = list(out.glob("lint_*.md"))
        assert len(written) == 1
        assert "# Skill corpus lint report" in written[0].read_text(encoding="utf-8")
