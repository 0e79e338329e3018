"""FastAPI dependency functions for injection into endpoint handlers.

The skills registry is expensive to build (it reads and parses the whole
corpus) so it is created once during the lifespan and stored on
``app.state``.  Linters are cheap and are built per request so that request
options can override the configured settings.
"""

from __future__ import annotations

from fastapi import Request

from skilldocs.config import Settings, settings
from skilldocs.corpus.registry import SkillRegistry
from skilldocs.engine.linter import CorpusLinter


def get_settings() -> Settings:
    return settings


def get_skills_registry(request: Request) -> SkillRegistry:
    """Return the global skills registry stored on ``app.state``."""
    return request.app.state.skills_registry


def build_linter(
    base: Settings,
    check_links: bool | None = None,
    strict: bool | None = None,
) -> CorpusLinter:
    """Build a :class:`CorpusLinter` with per-request overrides applied."""
    overrides: dict = {}
    if check_links is not None:
        overrides["links_enabled"] = check_links
    if strict is not None:
        overrides["strict"] = strict
    effective = base.model_copy(update=overrides) if overrides else base
    return CorpusLinter(effective)
