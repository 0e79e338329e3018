"""Skill document loader -- discovers and parses markdown skill files."""

from __future__ import annotations

from pathlib import Path

from skilldocs.corpus.models import LoadFailure, SkillDocument
from skilldocs.parsers.frontmatter_parser import parse_metadata, split_frontmatter
from skilldocs.parsers.markdown_parser import MarkdownParser
from skilldocs.utils.exceptions import DocumentLoadError, FrontmatterError, MetadataError
from skilldocs.utils.logging import get_logger

logger = get_logger(__name__)

_SKIPPED_FILES = {"readme.md", "changelog.md", "contributing.md"}
_SKILL_FILENAME = "skill.md"


def default_name_for(path: Path) -> str:
    """``skills/saloon/SKILL.md`` is named ``saloon``; other files by stem."""
    if path.name.lower() == _SKILL_FILENAME:
        return path.parent.name
    return path.stem


def parse_document(text: str, path: str | Path) -> SkillDocument:
    """Build a :class:`SkillDocument` from raw *text* read from *path*.

    Raises :class:`FrontmatterError` or :class:`MetadataError` when the
    metadata block cannot be interpreted.
    """
    path = Path(path)
    meta, body, body_start = split_frontmatter(text)
    metadata = parse_metadata(meta, default_name_for(path))
    parsed = MarkdownParser().parse(body, line_offset=body_start - 1)
    return SkillDocument(
        path=str(path),
        metadata=metadata,
        body=body,
        body_start_line=body_start,
        parsed=parsed,
    )


def load_document(filepath: str | Path) -> SkillDocument:
    """Read and parse a single skill file.

    Raises :class:`DocumentLoadError` for unreadable files and invalid
    metadata blocks.
    """
    filepath = Path(filepath)

    try:
        text = filepath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(str(filepath), str(exc)) from exc

    try:
        document = parse_document(text, filepath)
    except FrontmatterError as exc:
        raise DocumentLoadError(str(filepath), str(exc), line=exc.line) from exc
    except MetadataError as exc:
        raise DocumentLoadError(str(filepath), str(exc)) from exc

    logger.info(
        "skill_loaded",
        skill_name=document.name,
        file=str(filepath),
        code_blocks=len(document.parsed.code_blocks),
        links=len(document.parsed.links),
    )
    return document


def load_documents_from_directory(
    directory: str | Path,
) -> tuple[list[SkillDocument], list[LoadFailure]]:
    """Scan *directory* recursively for ``*.md`` skill files.

    Non-existent directories are handled gracefully (nothing is returned).
    Files that fail to load are returned as :class:`LoadFailure` records so
    one broken document never hides the rest of the corpus.
    """
    directory = Path(directory)

    if not directory.exists():
        logger.warning("skills_directory_missing", path=str(directory))
        return [], []

    if not directory.is_dir():
        logger.warning("skills_path_not_directory", path=str(directory))
        return [], []

    documents: list[SkillDocument] = []
    failures: list[LoadFailure] = []

    for filepath in sorted(directory.rglob("*.md")):
        if filepath.name.lower() in _SKIPPED_FILES:
            continue
        _load_into(filepath, documents, failures)

    return documents, failures


def load_documents(path: str | Path) -> tuple[list[SkillDocument], list[LoadFailure]]:
    """Load a single skill file, or every skill file under a directory."""
    path = Path(path)
    if path.is_file():
        documents: list[SkillDocument] = []
        failures: list[LoadFailure] = []
        _load_into(path, documents, failures)
        return documents, failures
    return load_documents_from_directory(path)


def _load_into(
    filepath: Path,
    documents: list[SkillDocument],
    failures: list[LoadFailure],
) -> None:
    try:
        documents.append(load_document(filepath))
    except DocumentLoadError as exc:
        logger.warning("skill_file_load_error", path=str(filepath), detail=exc.detail)
        failures.append(LoadFailure(path=str(filepath), error=exc.detail, line=exc.line))
