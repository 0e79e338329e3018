"""Corpus subsystem -- models, loader and registry for skill documents."""

from skilldocs.corpus.models import (
    CheckResult,
    CorpusReport,
    DocumentReport,
    LoadFailure,
    Severity,
    SkillDocument,
    SkillMetadata,
)

__all__ = [
    "CheckResult",
    "CorpusReport",
    "DocumentReport",
    "LoadFailure",
    "Severity",
    "SkillDocument",
    "SkillMetadata",
]
