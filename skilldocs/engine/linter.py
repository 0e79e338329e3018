"""Lint pipeline -- runs every check over a skill corpus.

The :class:`CorpusLinter` consumes a populated :class:`SkillRegistry` and:

1. Turns every load failure into an error result.
2. Lints each document (metadata, code samples, links) concurrently via
   :func:`asyncio.gather`.
3. Runs the corpus-wide conflict checks.
4. Collects everything into a :class:`CorpusReport`.
"""

from __future__ import annotations

import asyncio
import time
from contextlib import AsyncExitStack

from skilldocs.config import Settings
from skilldocs.corpus.loader import parse_document
from skilldocs.corpus.models import (
    CheckResult,
    CorpusReport,
    DocumentReport,
    LoadFailure,
    Severity,
    SkillDocument,
)
from skilldocs.corpus.registry import SkillRegistry
from skilldocs.engine.conflicts import ConflictDetector
from skilldocs.engine.links import LinkChecker
from skilldocs.engine.metadata_check import MetadataChecker
from skilldocs.engine.syntax import SyntaxValidator
from skilldocs.utils.exceptions import FrontmatterError, MetadataError
from skilldocs.utils.logging import get_logger


class CorpusLinter:
    """Top-level orchestrator for linting skill documents.

    Parameters
    ----------
    settings:
        Runtime configuration (strictness, link checking).
    link_checker:
        Optional :class:`LinkChecker`; built from *settings* when omitted.
        Ignored when ``settings.links_enabled`` is false.
    """

    def __init__(
        self,
        settings: Settings,
        link_checker: LinkChecker | None = None,
    ) -> None:
        self.settings = settings
        self.metadata_checker = MetadataChecker()
        self.syntax_validator = SyntaxValidator()
        self.conflict_detector = ConflictDetector()
        self.link_checker: LinkChecker | None = None
        if settings.links_enabled:
            self.link_checker = link_checker or LinkChecker.from_settings(settings)
        self.logger = get_logger("engine.linter")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def lint_registry(self, registry: SkillRegistry) -> CorpusReport:
        """Lint every document in *registry* and return a :class:`CorpusReport`."""
        start = time.perf_counter()
        documents = registry.documents()
        self.logger.info(
            "lint_start",
            documents=len(documents),
            failures=len(registry.failures),
            links=self.link_checker is not None,
        )

        async with AsyncExitStack() as stack:
            if self.link_checker is not None:
                await stack.enter_async_context(self.link_checker.session())
            reports = await asyncio.gather(*(self.lint_document(d) for d in documents))

        reports = list(reports)
        reports.extend(self._failure_report(f) for f in registry.failures)
        reports.sort(key=lambda r: r.document)

        corpus_checks = self.conflict_detector.check(registry)
        report = self._aggregate(reports, corpus_checks)

        self.logger.info(
            "lint_complete",
            passed=report.passed,
            documents=report.total_documents,
            errors=report.error_count,
            warnings=report.warning_count,
            elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return report

    async def lint_document(self, document: SkillDocument) -> DocumentReport:
        """Run the per-document checks on *document*."""
        checks: list[CheckResult] = []
        checks.extend(self.metadata_checker.check(document))
        checks.extend(self.syntax_validator.check(document.parsed.code_blocks, document.path))
        if self.link_checker is not None:
            checks.extend(await self.link_checker.check_document(document))

        report = DocumentReport(
            document=document.path,
            name=document.name,
            checks=checks,
            passed=not any(c.is_blocking(self.settings.strict) for c in checks),
        )
        self.logger.debug(
            "document_linted",
            document=document.path,
            passed=report.passed,
            failed_checks=[c.name for c in report.failures()],
        )
        return report

    async def lint_text(self, text: str, filename: str = "SKILL.md") -> DocumentReport:
        """Lint ad-hoc content that is not part of the corpus on disk."""
        try:
            document = parse_document(text, filename)
        except (FrontmatterError, MetadataError) as exc:
            return self._failure_report(
                LoadFailure(path=filename, error=str(exc), line=getattr(exc, "line", 1))
            )
        return await self.lint_document(document)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _failure_report(failure: LoadFailure) -> DocumentReport:
        check = CheckResult(
            name="document.load",
            passed=False,
            detail=failure.error,
            document=failure.path,
            line=failure.line,
        )
        return DocumentReport(document=failure.path, checks=[check], passed=False)

    def _aggregate(
        self,
        reports: list[DocumentReport],
        corpus_checks: list[CheckResult],
    ) -> CorpusReport:
        strict = self.settings.strict
        report = CorpusReport(
            documents=reports,
            corpus_checks=corpus_checks,
            strict=strict,
            total_documents=len(reports),
        )
        failed = [c for c in report.all_checks() if not c.passed]
        report.error_count = sum(1 for c in failed if c.severity == Severity.ERROR)
        report.warning_count = sum(1 for c in failed if c.severity == Severity.WARNING)
        report.passed = all(r.passed for r in reports) and not any(
            c.is_blocking(strict) for c in corpus_checks
        )
        return report
