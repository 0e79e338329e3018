"""Report renderer -- persists lint reports to the filesystem.

The :class:`ReportRenderer` writes a :class:`CorpusReport` as JSON or as a
Markdown summary under the configured ``output_dir`` and returns a
:class:`RenderedReport` descriptor.  :meth:`ReportRenderer.to_text` builds
the plain-text summary printed by the CLI.
"""

from __future__ import annotations

import os
from pathlib import Path

import aiofiles  # type: ignore[import-untyped]
from jinja2 import Environment
from pydantic import BaseModel

from skilldocs.corpus.models import CheckResult, CorpusReport
from skilldocs.utils.exceptions import ReportRenderError
from skilldocs.utils.file_utils import display_path, ensure_dir, generate_filename
from skilldocs.utils.logging import get_logger

logger = get_logger("engine.renderer")

_EXTENSIONS = {"json": "json", "markdown": "md"}

MARKDOWN_TEMPLATE = """\
# Skill corpus lint report

**Result:** {{ "PASSED" if report.passed else "FAILED" }}{% if report.strict %} (strict){% endif %}

| Documents | Errors | Warnings |
|-----------|--------|----------|
| {{ report.total_documents }} | {{ report.error_count }} | {{ report.warning_count }} |
{% for doc in report.documents %}
## {{ doc.name or doc.document }}

`{{ doc.document }}` -- {{ "passed" if doc.passed else "failed" }}
{% set failures = doc.failures() %}{% if failures %}
| Check | Severity | Line | Detail |
|-------|----------|------|--------|
{% for c in failures %}| {{ c.name }} | {{ c.severity.value }} | {{ c.line or "" }} | {{ c.detail | replace("|", "\\\\|") }} |
{% endfor %}{% else %}
All {{ doc.checks | length }} checks passed.
{% endif %}{% endfor %}
{% if report.corpus_checks %}
## Corpus

| Check | Document | Line | Detail |
|-------|----------|------|--------|
{% for c in report.corpus_checks %}| {{ c.name }} | {{ c.document }} | {{ c.line or "" }} | {{ c.detail | replace("|", "\\\\|") }} |
{% endfor %}{% endif %}"""


class RenderedReport(BaseModel):
    """Descriptor for a report that has been written to disk.

    Attributes:
        file_path: Absolute path to the rendered file.
        format: ``"json"`` or ``"markdown"``.
        size_bytes: Size of the written file in bytes.
        filename: Just the filename portion.
    """

    file_path: str
    format: str
    size_bytes: int
    filename: str


def _format_check(check: CheckResult) -> str:
    location = display_path(check.document)
    if check.line:
        location = f"{location}:{check.line}"
    return f"  {location}: {check.severity.value}: [{check.name}] {check.detail}"


class ReportRenderer:
    """Write :class:`CorpusReport` objects to disk.

    Parameters
    ----------
    output_dir:
        Root directory where reports are stored.  Created on first render.
    """

    def __init__(self, output_dir: str = "./output") -> None:
        self.output_dir = Path(output_dir)
        self._env = Environment(autoescape=False, trim_blocks=False)

    def to_json(self, report: CorpusReport) -> str:
        return report.model_dump_json(indent=2)

    def to_markdown(self, report: CorpusReport) -> str:
        template = self._env.from_string(MARKDOWN_TEMPLATE)
        return template.render(report=report)

    def to_text(self, report: CorpusReport, verbose: bool = False) -> str:
        """Human-readable summary: failed checks grouped by document."""
        lines: list[str] = []
        for doc in report.documents:
            shown = doc.checks if verbose else doc.failures()
            status = "ok" if doc.passed else "FAIL"
            lines.append(f"{status:<4} {display_path(doc.document)} ({doc.name or '?'})")
            lines.extend(_format_check(c) for c in shown)

        failed_corpus = [c for c in report.corpus_checks if not c.passed]
        if failed_corpus:
            lines.append("corpus")
            lines.extend(_format_check(c) for c in failed_corpus)

        lines.append(
            f"{report.total_documents} document(s), {report.error_count} error(s), "
            f"{report.warning_count} warning(s): {'passed' if report.passed else 'FAILED'}"
        )
        return "\n".join(lines)

    async def render(self, report: CorpusReport, fmt: str = "json", prefix: str = "lint") -> RenderedReport:
        """Persist *report* in *fmt* and return a descriptor.

        Raises
        ------
        ReportRenderError
            When *fmt* is not ``json`` or ``markdown``.
        """
        fmt = fmt.lower().strip()
        extension = _EXTENSIONS.get(fmt)
        if extension is None:
            raise ReportRenderError(fmt, f"unsupported format (expected one of {sorted(_EXTENSIONS)})")

        content = self.to_json(report) if fmt == "json" else self.to_markdown(report)

        ensure_dir(self.output_dir)
        filename = generate_filename(prefix, extension)
        file_path = self.output_dir / filename

        logger.info("render_start", filename=filename, format=fmt)

        async with aiofiles.open(file_path, mode="w", encoding="utf-8") as fh:
            await fh.write(content)

        rendered = RenderedReport(
            file_path=str(file_path.resolve()),
            format=fmt,
            size_bytes=os.path.getsize(file_path),
            filename=filename,
        )
        logger.info("render_complete", file_path=rendered.file_path, size_bytes=rendered.size_bytes)
        return rendered
