"""Syntax validation for fenced code samples.

Each fenced block is checked according to the language in its info string:

- *python*: compiled with :func:`ast.parse`.
- *json*: decoded with :func:`json.loads`.
- *yaml*: every document loaded with :func:`yaml.safe_load_all`.
- *toml*: decoded with :func:`tomllib.loads`.
- *bash*: quoting checked with :mod:`shlex`, plus ``if/fi``, ``case/esac``
  and ``do/done`` balance.
- *php*, *javascript*, *sql* and C-like languages (c, cpp, csharp, go,
  java): lexical scan that skips strings and comments
  (and PHP heredoc/nowdoc bodies) and requires balanced ``()[]{}``.

Prose-like languages (``text``, ``console``, ``diff`` ...) and languages with
no checker pass with a "not checked" detail.
"""

from __future__ import annotations

import ast
import json
import re
import shlex
import tomllib
from typing import Callable, NamedTuple

import yaml

from skilldocs.corpus.models import CheckResult, CodeBlock, Severity
from skilldocs.utils.logging import get_logger

logger = get_logger("engine.syntax")

_ALIASES: dict[str, str] = {
    "py": "python",
    "python3": "python",
    "yml": "yaml",
    "sh": "bash",
    "shell": "bash",
    "zsh": "bash",
    "js": "javascript",
    "jsx": "javascript",
    "ts": "javascript",
    "tsx": "javascript",
    "typescript": "javascript",
    "mysql": "sql",
    "postgresql": "sql",
    "pgsql": "sql",
    "sqlite": "sql",
    "c++": "cpp",
    "cs": "csharp",
    "c#": "csharp",
    "golang": "go",
    "h": "c",
}

_UNCHECKED = {
    "text", "txt", "plaintext", "plain", "markdown", "md", "console",
    "shell-session", "output", "log", "diff", "env", "dotenv", "ini",
    "http", "blade", "html", "xml", "csv", "mermaid",
}

_PAIRS = {")": "(", "]": "[", "}": "{"}


def normalize_language(language: str) -> str:
    lang = language.strip().lower().lstrip(".")
    return _ALIASES.get(lang, lang)


class SyntaxIssue(NamedTuple):
    """A syntax problem, located by 0-based line inside the code block."""

    offset: int
    message: str


class LexicalProfile(NamedTuple):
    line_comments: tuple[str, ...] = ()
    block_comments: tuple[tuple[str, str], ...] = ()
    quotes: tuple[str, ...] = ("'", '"')
    single_line_quotes: tuple[str, ...] = ()
    heredoc: bool = False


PHP = LexicalProfile(
    line_comments=("//", "#"),
    block_comments=(("/*", "*/"),),
    quotes=("'", '"', "`"),
    heredoc=True,
)
C_LIKE = LexicalProfile(
    line_comments=("//",),
    block_comments=(("/*", "*/"),),
    quotes=("'", '"', "`"),
    single_line_quotes=("'", '"'),
)
JAVASCRIPT = C_LIKE
SQL = LexicalProfile(
    line_comments=("--",),
    block_comments=(("/*", "*/"),),
    quotes=("'", '"', "`"),
)

_RE_HEREDOC = re.compile(r"<<<[ \t]*(['\"]?)([A-Za-z_][A-Za-z0-9_]*)\1[ \t]*\n")


# ---------------------------------------------------------------------------
# Lexical scanner
# ---------------------------------------------------------------------------


def _line_of(source: str, pos: int) -> int:
    return source.count("\n", 0, pos)


def _find_heredoc_end(source: str, start: int, label: str) -> int:
    """Return the index just past the closing *label* line, or -1."""
    closing = re.compile(rf"^[ \t]*{re.escape(label)}\b", re.MULTILINE)
    m = closing.search(source, start)
    return m.end() if m else -1


def scan_delimiters(source: str, profile: LexicalProfile) -> SyntaxIssue | None:
    """Check that brackets balance outside strings and comments.

    Returns the first :class:`SyntaxIssue` found, or ``None``.
    """
    stack: list[tuple[str, int]] = []
    i = 0
    n = len(source)

    while i < n:
        ch = source[i]

        # ---- Heredoc / nowdoc ----
        if profile.heredoc and source.startswith("<<<", i):
            m = _RE_HEREDOC.match(source, i)
            if m:
                end = _find_heredoc_end(source, m.end(), m.group(2))
                if end == -1:
                    return SyntaxIssue(_line_of(source, i), f"unterminated heredoc '{m.group(2)}'")
                i = end
                continue

        # ---- Block comments ----
        opener = next((b for b in profile.block_comments if source.startswith(b[0], i)), None)
        if opener is not None:
            end = source.find(opener[1], i + len(opener[0]))
            if end == -1:
                return SyntaxIssue(_line_of(source, i), "unterminated block comment")
            i = end + len(opener[1])
            continue

        # ---- Line comments (PHP attributes "#[" are code) ----
        comment = next((c for c in profile.line_comments if source.startswith(c, i)), None)
        if comment is not None and not (comment == "#" and source.startswith("#[", i)):
            end = source.find("\n", i)
            i = n if end == -1 else end
            continue

        # ---- Strings ----
        if ch in profile.quotes:
            j = i + 1
            while j < n:
                c = source[j]
                if c == "\\":
                    j += 2
                    continue
                if c == ch:
                    break
                if c == "\n" and ch in profile.single_line_quotes:
                    return SyntaxIssue(_line_of(source, i), f"unterminated string literal {ch}")
                j += 1
            if j >= n:
                return SyntaxIssue(_line_of(source, i), f"unterminated string literal {ch}")
            i = j + 1
            continue

        # ---- Brackets ----
        if ch in "([{":
            stack.append((ch, i))
        elif ch in _PAIRS:
            if not stack:
                return SyntaxIssue(_line_of(source, i), f"unexpected '{ch}'")
            open_ch, open_pos = stack.pop()
            if open_ch != _PAIRS[ch]:
                return SyntaxIssue(
                    _line_of(source, i),
                    f"'{ch}' does not match '{open_ch}' opened on line {_line_of(source, open_pos) + 1}",
                )
        i += 1

    if stack:
        open_ch, open_pos = stack[-1]
        return SyntaxIssue(_line_of(source, open_pos), f"'{open_ch}' is never closed")
    return None


# ---------------------------------------------------------------------------
# Language checkers
# ---------------------------------------------------------------------------


def _check_python(source: str) -> SyntaxIssue | None:
    try:
        ast.parse(source)
    except SyntaxError as exc:
        return SyntaxIssue(max((exc.lineno or 1) - 1, 0), exc.msg)
    return None


def _check_json(source: str) -> SyntaxIssue | None:
    try:
        json.loads(source)
    except json.JSONDecodeError as exc:
        return SyntaxIssue(exc.lineno - 1, exc.msg)
    return None


def _check_yaml(source: str) -> SyntaxIssue | None:
    try:
        list(yaml.safe_load_all(source))
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        problem = getattr(exc, "problem", None) or str(exc)
        return SyntaxIssue(mark.line if mark is not None else 0, problem)
    return None


_RE_TOML_LINE = re.compile(r"at line (\d+)")


def _check_toml(source: str) -> SyntaxIssue | None:
    try:
        tomllib.loads(source)
    except tomllib.TOMLDecodeError as exc:
        m = _RE_TOML_LINE.search(str(exc))
        return SyntaxIssue(int(m.group(1)) - 1 if m else 0, str(exc))
    return None


_RE_BASH_HEREDOC = re.compile(r"(?<!<)<<(?!<)-?\s*(['\"]?)([A-Za-z_][A-Za-z0-9_]*)\1")
_BASH_SEPARATORS = {";", "&&", "||", "|", "&", ";;", "(", ")", "{", "then", "do", "else", "elif"}
_BASH_BLOCKS = {"if": "fi", "case": "esac", "do": "done"}
_BASH_CLOSERS = {v: k for k, v in _BASH_BLOCKS.items()}
_BASH_WORD_BREAKS = " \t\n;&|()"


def _strip_bash_comments(command: str) -> str:
    """Drop comments: a ``#`` outside quotes that begins a word."""
    out: list[str] = []
    quote = ""
    i = 0
    n = len(command)

    while i < n:
        ch = command[i]
        if ch == "\\" and quote != "'":
            out.append(command[i:i + 2])
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "'\"":
            quote = ch
        elif ch == "#" and (i == 0 or command[i - 1] in _BASH_WORD_BREAKS):
            end = command.find("\n", i)
            if end == -1:
                break
            i = end
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _bash_tokens(command: str) -> list[str]:
    lexer = shlex.shlex(command, posix=True, punctuation_chars=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    return list(lexer)


def _check_bash(source: str) -> SyntaxIssue | None:
    lines = source.split("\n")
    stack: list[tuple[str, int]] = []
    buffer = ""
    buffer_start = 0
    idx = 0

    while idx < len(lines):
        line = lines[idx]
        if not buffer:
            buffer_start = idx
        buffer = f"{buffer}\n{line}" if buffer else line
        idx += 1

        if buffer.endswith("\\"):
            buffer = buffer[:-1]
            continue

        command = _strip_bash_comments(buffer)
        try:
            tokens = _bash_tokens(command)
        except ValueError as exc:
            if "closing quotation" in str(exc):
                continue
            return SyntaxIssue(buffer_start, str(exc))

        heredoc = _RE_BASH_HEREDOC.search(command)
        if heredoc:
            label = heredoc.group(2)
            while idx < len(lines) and lines[idx].strip() != label:
                idx += 1
            if idx >= len(lines):
                return SyntaxIssue(buffer_start, f"unterminated here-document '{label}'")
            idx += 1

        command_start = True
        for token in tokens:
            if command_start and token in _BASH_BLOCKS:
                stack.append((token, buffer_start))
            elif command_start and token in _BASH_CLOSERS:
                opener = _BASH_CLOSERS[token]
                if not stack or stack[-1][0] != opener:
                    return SyntaxIssue(buffer_start, f"unexpected '{token}'")
                stack.pop()
            command_start = token in _BASH_SEPARATORS
        buffer = ""

    if buffer:
        return SyntaxIssue(buffer_start, "No closing quotation")
    if stack:
        opener, line = stack[-1]
        return SyntaxIssue(line, f"'{opener}' is never closed by '{_BASH_BLOCKS[opener]}'")
    return None


def _lexical(profile: LexicalProfile) -> Callable[[str], SyntaxIssue | None]:
    return lambda source: scan_delimiters(source, profile)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


class SyntaxValidator:
    """Validate fenced code blocks against their declared language."""

    def __init__(self) -> None:
        self._checkers: dict[str, Callable[[str], SyntaxIssue | None]] = {
            "python": _check_python,
            "json": _check_json,
            "yaml": _check_yaml,
            "toml": _check_toml,
            "bash": _check_bash,
            "php": _lexical(PHP),
            "javascript": _lexical(JAVASCRIPT),
            "sql": _lexical(SQL),
        }
        for language in ("c", "cpp", "csharp", "go", "java"):
            self._checkers[language] = _lexical(C_LIKE)

    def validate(self, block: CodeBlock, document: str = "") -> CheckResult:
        """Return a :class:`CheckResult` for a single code block."""
        if not block.closed:
            return CheckResult(
                name="syntax.unclosed_fence",
                passed=False,
                detail="Code fence is never closed",
                document=document,
                line=block.line,
            )

        if not block.language:
            return CheckResult(
                name="syntax.undeclared_language",
                passed=False,
                severity=Severity.WARNING,
                detail="Code fence does not declare a language",
                document=document,
                line=block.line,
            )

        language = normalize_language(block.language)
        checker = self._checkers.get(language)
        if checker is None:
            if language not in _UNCHECKED:
                logger.debug("no_syntax_checker", language=language)
            return CheckResult(
                name="syntax.code_block",
                passed=True,
                severity=Severity.INFO,
                detail=f"{block.language}: not checked",
                document=document,
                line=block.line,
            )

        issue = checker(block.content)
        if issue is None:
            return CheckResult(
                name="syntax.code_block",
                passed=True,
                detail=f"{language}: OK",
                document=document,
                line=block.line,
            )
        return CheckResult(
            name="syntax.code_block",
            passed=False,
            detail=f"{language}: {issue.message}",
            document=document,
            line=block.first_content_line + issue.offset,
        )

    def check(self, blocks: list[CodeBlock], document: str = "") -> list[CheckResult]:
        return [self.validate(block, document) for block in blocks]
