"""Request schemas for the lint endpoints.

Responses reuse :class:`CorpusReport` and :class:`DocumentReport` directly.
"""

from pydantic import BaseModel, Field


class LintRequest(BaseModel):
    check_links: bool | None = None  # None: use the configured default
    strict: bool | None = None


class LintDocumentRequest(BaseModel):
    content: str = Field(..., min_length=1, description="Raw skill document, frontmatter included")
    filename: str = "SKILL.md"
    strict: bool | None = None
