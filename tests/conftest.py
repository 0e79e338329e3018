import pytest
import structlog
from pathlib import Path

from skilldocs.config import Settings

REPO_SKILLS_DIR = Path(__file__).resolve().parents[1] / "skills"


VALID_SKILL = """---
name: widget-client
description: Call the Widget API from PHP.
agents: [claude-code, cursor]
tags: [php, http]
packages: [acme/widget-client]
---

# Widget client

Always call `Widget::connect()` before sending requests.

## Usage

```php
$client = Widget::connect('token');
$items = $client->list(['page' => 1]);
```

```json
{"page": 1, "per_page": 20}
```

## References

- [Docs](https://widgets.example.com/docs)
- [Changelog](CHANGELOG.txt)
"""


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Drop structlog config bound to a captured (later closed) stderr."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def valid_skill_text():
    return VALID_SKILL


@pytest.fixture
def write_skill(tmp_path):
    """Write ``skills/<name>/SKILL.md`` under tmp_path and return its path."""

    def _write(name: str, text: str, root: Path | None = None) -> Path:
        base = (root or tmp_path / "skills") / name
        base.mkdir(parents=True, exist_ok=True)
        path = base / "SKILL.md"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def skills_dir(tmp_path, write_skill, valid_skill_text):
    write_skill("widget-client", valid_skill_text)
    write_skill(
        "gadget-tree",
        """---
name: gadget-tree
description: Traverse gadget trees.
agents: [claude-code]
tags: [php, tree]
---

# Gadget tree

Use `Gadget::tree()` to load a whole subtree in one query.

```php
$tree = Gadget::tree()->get();
```
""",
    )
    return tmp_path / "skills"


@pytest.fixture
def repo_skills_dir():
    return REPO_SKILLS_DIR


@pytest.fixture
def offline_settings(skills_dir, tmp_path):
    return Settings(
        skills_dirs=[str(skills_dir)],
        links_enabled=False,
        output_dir=str(tmp_path / "output"),
    )


@pytest.fixture
def output_dir(tmp_path):
    out = tmp_path / "output"
    out.mkdir()
    return str(out)
