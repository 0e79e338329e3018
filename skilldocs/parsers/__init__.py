"""Parsers for skill documents: YAML frontmatter and the markdown body."""

from skilldocs.parsers.frontmatter_parser import parse_metadata, split_frontmatter
from skilldocs.parsers.markdown_parser import MarkdownParser, slugify

__all__ = [
    "MarkdownParser",
    "parse_metadata",
    "slugify",
    "split_frontmatter",
]
