"""Central registry that discovers, stores, and looks up skill documents."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from skilldocs.corpus.loader import load_documents
from skilldocs.corpus.models import LoadFailure, SkillDocument, SkillMetadata
from skilldocs.utils.exceptions import SkillNotFoundError
from skilldocs.utils.logging import get_logger

logger = get_logger(__name__)

_RE_WORD = re.compile(r"[a-z0-9][a-z0-9_\-]*")


class SkillRegistry:
    """Registry of every skill document in the corpus.

    Typical lifecycle::

        registry = SkillRegistry()
        registry.discover("./skills")
        docs = registry.match(agent="claude-code", query="recursive tree")
        doc = registry.get("laravel-adjacency-list")
    """

    def __init__(self) -> None:
        self._documents: dict[str, SkillDocument] = {}
        self.failures: list[LoadFailure] = []
        # name -> every path that declared it, in registration order
        self.duplicates: dict[str, list[str]] = {}

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover(self, *directories: str | Path) -> int:
        """Scan each directory (or single skill file) and register what loads.

        Returns the total number of newly registered documents.  Files that
        fail to load are kept in :attr:`failures`.
        """
        count = 0

        for directory in directories:
            documents, failures = load_documents(directory)
            self.failures.extend(failures)
            for document in documents:
                self.register(document)
                count += 1

        logger.info("skills_discovered", count=count, failures=len(self.failures))
        return count

    # ------------------------------------------------------------------
    # Registration & lookup
    # ------------------------------------------------------------------

    def register(self, document: SkillDocument) -> None:
        """Add *document* to the registry, keyed by its metadata name.

        A second document with the same name overwrites the first; both paths
        are recorded in :attr:`duplicates` so the lint run can report them.
        """
        name = document.name
        existing = self._documents.get(name)
        if existing is not None and existing.path != document.path:
            logger.warning(
                "skill_overwritten",
                skill_name=name,
                old_path=existing.path,
                new_path=document.path,
            )
            paths = self.duplicates.setdefault(name, [existing.path])
            paths.append(document.path)
        self._documents[name] = document
        logger.debug("skill_registered", skill_name=name)

    def get(self, name: str) -> SkillDocument:
        """Return the document registered under *name*.

        Raises :class:`SkillNotFoundError` if no such document exists.
        """
        document = self._documents.get(name)
        if document is None:
            raise SkillNotFoundError(name)
        return document

    def match(
        self,
        agent: str | None = None,
        tags: Iterable[str] = (),
        query: str | None = None,
    ) -> list[SkillDocument]:
        """Return the documents an agent would consider relevant.

        The lookup strategy is:

        1. If *agent* is given, keep documents that list it in ``agents``.
        2. Keep documents carrying every tag in *tags* (case-insensitive).
        3. If *query* is given, keep documents where at least one query word
           occurs in the name, description, tags or packages, ranked by the
           number of matching words, then by name.
        """
        wanted_tags = {t.lower().strip() for t in tags if t.strip()}
        words = _RE_WORD.findall(query.lower()) if query else []

        scored: list[tuple[int, SkillDocument]] = []
        for document in self._documents.values():
            meta = document.metadata
            if agent and agent.lower() not in {a.lower() for a in meta.agents}:
                continue
            if not wanted_tags.issubset({t.lower() for t in meta.tags}):
                continue

            if words:
                haystack = " ".join(
                    [meta.name, meta.description, *meta.tags, *meta.packages]
                ).lower()
                hits = sum(1 for w in words if w in haystack)
                if hits == 0:
                    continue
            else:
                hits = 0
            scored.append((hits, document))

        scored.sort(key=lambda item: (-item[0], item[1].name))
        return [document for _, document in scored]

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def documents(self) -> list[SkillDocument]:
        """Return every registered document, sorted by name."""
        return sorted(self._documents.values(), key=lambda d: d.name)

    def list_all(self) -> list[SkillMetadata]:
        """Return metadata for every registered document."""
        return [d.metadata for d in self.documents()]

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, name: str) -> bool:
        return name in self._documents
