"""Markdown parser: extracts the structure of a skill document body.

Uses regex-based, line-oriented parsing (no external markdown library) to
collect:
- Headings (# through ######), with GitHub-style anchor slugs
- Fenced code blocks (``` or ~~~), with language and opening line
- Links: inline, images, angle autolinks, reference definitions and raw
  ``<a href>`` anchors
- Guidance statements: directive lines that name API surfaces in inline code

Everything inside code fences and inline code spans is ignored when looking
for links.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from skilldocs.corpus.models import (
    CodeBlock,
    GuidanceStatement,
    Heading,
    Link,
    ParsedBody,
)


# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

_RE_HEADING = re.compile(r"^ {0,3}(#{1,6})\s+(.+?)(?:\s+#+)?\s*$")
_RE_FENCE_OPEN = re.compile(r"^( {0,3})(`{3,}|~{3,})\s*([^`]*?)\s*$")
_RE_INLINE_CODE = re.compile(r"(`+)(.+?)\1")
_RE_INLINE_LINK = re.compile(
    r"(!?)\[([^\]]*)\]\(\s*<?([^)\s>]+)>?(?:\s+(?:\"[^\"]*\"|'[^']*'))?\s*\)"
)
_RE_AUTOLINK = re.compile(r"<((?:https?|mailto):[^>\s]+)>")
_RE_REFERENCE_DEF = re.compile(r"^ {0,3}\[([^\]]+)\]:\s*<?(\S+?)>?(?:\s+[\"'(].*)?\s*$")
_RE_SLUG_STRIP = re.compile(r"[^\w\- ]")

_RE_NEGATIVE = re.compile(
    r"\b(never|avoid|don't|do not|must not|should not|shouldn't|cannot)\b",
    re.IGNORECASE,
)
_RE_POSITIVE = re.compile(r"\b(always|must|should|prefer|use)\b", re.IGNORECASE)
_RE_INSTEAD_OF = re.compile(r"\binstead of\b", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def slugify(text: str) -> str:
    """Return the anchor slug GitHub generates for a heading."""
    text = _RE_INLINE_CODE.sub(lambda m: m.group(2), text)
    text = _RE_SLUG_STRIP.sub("", text.strip().lower())
    return text.replace(" ", "-")


def _strip_inline_code(line: str) -> str:
    """Blank out inline code spans so their contents are not scanned."""
    return _RE_INLINE_CODE.sub(lambda m: " " * len(m.group(0)), line)


def _is_closing_fence(line: str, fence: str) -> bool:
    stripped = line.strip()
    if not stripped or stripped[0] != fence[0]:
        return False
    run = len(stripped) - len(stripped.lstrip(fence[0]))
    return run >= len(fence) and not stripped[run:].strip()


def _html_links(line: str) -> list[tuple[str, str]]:
    if "<a" not in line.lower():
        return []
    soup = BeautifulSoup(line, "html.parser")
    return [(a["href"], a.get_text(strip=True)) for a in soup.find_all("a", href=True)]


def _guidance_for(line: str, line_no: int) -> GuidanceStatement | None:
    """Classify a prose line as positive or negative guidance, if it is one."""
    spans = [(m.start(), m.group(2).strip()) for m in _RE_INLINE_CODE.finditer(line)]
    if not spans:
        return None

    prose = _strip_inline_code(line)
    if _RE_NEGATIVE.search(prose):
        negative_line = True
    elif _RE_POSITIVE.search(prose):
        negative_line = False
    else:
        return None

    instead = _RE_INSTEAD_OF.search(prose)
    split_at = instead.start() if instead else len(line)

    statement = GuidanceStatement(text=line.strip(), line=line_no)
    for pos, span in spans:
        if not span:
            continue
        negative = negative_line if pos < split_at else not negative_line
        (statement.negative if negative else statement.positive).append(span)
    return statement


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


class MarkdownParser:
    """Parse a markdown body into a :class:`ParsedBody` instance."""

    def parse(self, text: str, line_offset: int = 0) -> ParsedBody:
        """Parse *text*; reported line numbers are shifted by *line_offset*."""
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        return self._parse_lines(text.split("\n"), line_offset)

    # ------------------------------------------------------------------
    # Private implementation
    # ------------------------------------------------------------------

    def _parse_lines(self, lines: list[str], line_offset: int) -> ParsedBody:
        parsed = ParsedBody()
        section = ""

        in_code_block = False
        fence = ""
        fence_info = ""
        fence_line = 0
        fence_section = ""
        code_lines: list[str] = []

        for idx, line in enumerate(lines):
            line_no = line_offset + idx + 1

            # ---- Inside a code fence ----
            if in_code_block:
                if _is_closing_fence(line, fence):
                    parsed.code_blocks.append(
                        CodeBlock(
                            language=fence_info.split()[0].lower() if fence_info else "",
                            info=fence_info,
                            content="\n".join(code_lines),
                            line=fence_line,
                            section=fence_section,
                        )
                    )
                    in_code_block = False
                    code_lines = []
                else:
                    code_lines.append(line)
                continue

            # ---- Opening code fence ----
            fence_match = _RE_FENCE_OPEN.match(line)
            if fence_match:
                in_code_block = True
                fence = fence_match.group(2)
                fence_info = fence_match.group(3)
                fence_line = line_no
                fence_section = section
                continue

            # ---- Heading ----
            heading_match = _RE_HEADING.match(line)
            if heading_match:
                heading_text = heading_match.group(2).strip()
                parsed.headings.append(
                    Heading(
                        level=len(heading_match.group(1)),
                        text=heading_text,
                        line=line_no,
                        slug=slugify(heading_text),
                    )
                )
                section = heading_text
                continue

            if not line.strip():
                continue

            # ---- Links ----
            self._collect_links(line, line_no, section, parsed.links)

            # ---- Guidance ----
            statement = _guidance_for(line, line_no)
            if statement is not None and (statement.positive or statement.negative):
                parsed.guidance.append(statement)

        # ---- End of text inside a fence: keep it, flagged as unclosed ----
        if in_code_block:
            parsed.code_blocks.append(
                CodeBlock(
                    language=fence_info.split()[0].lower() if fence_info else "",
                    info=fence_info,
                    content="\n".join(code_lines),
                    line=fence_line,
                    closed=False,
                    section=fence_section,
                )
            )

        return parsed

    @staticmethod
    def _collect_links(line: str, line_no: int, section: str, links: list[Link]) -> None:
        ref_match = _RE_REFERENCE_DEF.match(line)
        if ref_match:
            links.append(
                Link(
                    url=ref_match.group(2),
                    text=ref_match.group(1),
                    line=line_no,
                    section=section,
                    kind="reference",
                )
            )
            return

        scan = _strip_inline_code(line)

        for m in _RE_INLINE_LINK.finditer(scan):
            links.append(
                Link(
                    url=m.group(3),
                    text=m.group(2),
                    line=line_no,
                    section=section,
                    kind="image" if m.group(1) else "inline",
                )
            )

        for m in _RE_AUTOLINK.finditer(scan):
            links.append(
                Link(url=m.group(1), text=m.group(1), line=line_no, section=section, kind="autolink")
            )

        for href, text in _html_links(scan):
            links.append(Link(url=href, text=text, line=line_no, section=section, kind="html"))
