"""Lint engine -- metadata, code-sample, link and conflict checks.

Public API::

    from skilldocs.engine import (
        ConflictDetector,
        CorpusLinter,
        LinkChecker,
        MetadataChecker,
        RenderedReport,
        ReportRenderer,
        SyntaxValidator,
    )
"""

from skilldocs.engine.conflicts import ConflictDetector
from skilldocs.engine.linter import CorpusLinter
from skilldocs.engine.links import LinkChecker
from skilldocs.engine.metadata_check import MetadataChecker
from skilldocs.engine.renderer import RenderedReport, ReportRenderer
from skilldocs.engine.syntax import SyntaxValidator

__all__ = [
    "ConflictDetector",
    "CorpusLinter",
    "LinkChecker",
    "MetadataChecker",
    "RenderedReport",
    "ReportRenderer",
    "SyntaxValidator",
]
