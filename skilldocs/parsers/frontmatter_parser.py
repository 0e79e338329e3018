"""YAML frontmatter handling for skill documents.

A skill document may open with a YAML block delimited by ``---`` lines::

    ---
    name: saloon
    description: Build API integrations with Saloon
    agents: [claude-code, cursor]
    tags: [php, http]
    ---
    # Saloon
    ...
"""

from __future__ import annotations

import yaml
from pydantic import ValidationError

from skilldocs.corpus.models import SkillMetadata
from skilldocs.utils.exceptions import FrontmatterError, MetadataError

_DELIMITER = "---"
_CLOSERS = ("---", "...")

# Frontmatter keys mapped onto SkillMetadata fields; everything else is extra.
_KNOWN_KEYS = {"name", "description", "agents", "compatible_agents", "tags", "packages", "version"}


def split_frontmatter(text: str) -> tuple[dict, str, int]:
    """Split YAML frontmatter from the markdown body.

    Returns ``(metadata, body, body_start_line)`` where *body_start_line* is
    the 1-based line number of the first body line in *text*.  A document
    without frontmatter yields ``({}, text, 1)``.

    Raises :class:`FrontmatterError` for an unterminated block, invalid YAML,
    or YAML that is not a mapping.
    """
    lines = text.lstrip("\ufeff").splitlines()
    if not lines or lines[0].rstrip() != _DELIMITER:
        return {}, text, 1

    end_idx = None
    for idx in range(1, len(lines)):
        if lines[idx].rstrip() in _CLOSERS:
            end_idx = idx
            break

    if end_idx is None:
        raise FrontmatterError("opening '---' has no closing delimiter", line=1)

    raw = "\n".join(lines[1:end_idx])
    try:
        meta = yaml.safe_load(raw) if raw.strip() else {}
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = mark.line + 2 if mark is not None else 1
        problem = getattr(exc, "problem", None) or str(exc)
        raise FrontmatterError(str(problem), line=line) from exc

    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontmatterError(
            f"expected a mapping, got {type(meta).__name__}", line=2
        )

    body = "\n".join(lines[end_idx + 1:])
    return meta, body, end_idx + 2


def parse_metadata(meta: dict, default_name: str) -> SkillMetadata:
    """Build :class:`SkillMetadata` from a frontmatter mapping.

    ``name`` falls back to *default_name*; a missing or null description is
    an empty string, left for the metadata checks to flag.  Wrong types raise
    :class:`MetadataError`.
    """
    fields = {k: v for k, v in meta.items() if k in _KNOWN_KEYS}
    extra = {str(k): v for k, v in meta.items() if k not in _KNOWN_KEYS}

    if fields.get("name") is None:
        fields["name"] = default_name
    if fields.get("description") is None:
        fields["description"] = ""
    for key in ("agents", "compatible_agents", "tags", "packages"):
        if key in fields and fields[key] is None:
            fields[key] = []
    if isinstance(fields.get("version"), (int, float)):
        fields["version"] = str(fields["version"])

    try:
        return SkillMetadata.model_validate({**fields, "extra": extra})
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or "metadata"
        raise MetadataError(field, first.get("msg", "invalid value")) from exc
