"""Corpus-wide checks: duplicate names and contradictory guidance.

Two documents conflict when one tells the agent to use an API surface
(``Always call `->send()` ``) and another tells it not to (``Never call
`->send()` ``).  Surfaces are compared after normalisation so that
``->send()``, ``->send($request)`` and ``->send`` are the same surface.
"""

from __future__ import annotations

import re
from collections import defaultdict

from skilldocs.corpus.models import CheckResult, SkillDocument
from skilldocs.corpus.registry import SkillRegistry
from skilldocs.utils.logging import get_logger

logger = get_logger("engine.conflicts")

_RE_ARGS = re.compile(r"\([^()]*\)$")
_RE_SPACE = re.compile(r"\s+")


def normalize_surface(span: str) -> str:
    """Normalise an inline code span to the API surface it names."""
    surface = _RE_SPACE.sub(" ", span.strip()).rstrip(";").strip()
    surface = _RE_ARGS.sub("", surface).strip()
    return surface.lower()


class _Mention:
    __slots__ = ("document", "line", "text")

    def __init__(self, document: SkillDocument, line: int, text: str) -> None:
        self.document = document
        self.line = line
        self.text = text


class ConflictDetector:
    """Find guidance that disagrees across documents."""

    def check(self, registry: SkillRegistry) -> list[CheckResult]:
        checks = self._check_duplicate_names(registry)
        checks.extend(self._check_guidance(registry.documents()))
        logger.info(
            "conflict_check_complete",
            documents=len(registry),
            conflicts=sum(1 for c in checks if not c.passed),
        )
        return checks

    @staticmethod
    def _check_duplicate_names(registry: SkillRegistry) -> list[CheckResult]:
        return [
            CheckResult(
                name="conflict.duplicate_name",
                passed=False,
                detail=f"Skill name '{name}' is declared by {', '.join(paths)}",
                document=paths[-1],
                line=1,
            )
            for name, paths in sorted(registry.duplicates.items())
        ]

    def _check_guidance(self, documents: list[SkillDocument]) -> list[CheckResult]:
        positive: dict[str, list[_Mention]] = defaultdict(list)
        negative: dict[str, list[_Mention]] = defaultdict(list)

        for document in documents:
            for statement in document.parsed.guidance:
                for span in statement.positive:
                    surface = normalize_surface(span)
                    if surface:
                        positive[surface].append(_Mention(document, statement.line, statement.text))
                for span in statement.negative:
                    surface = normalize_surface(span)
                    if surface:
                        negative[surface].append(_Mention(document, statement.line, statement.text))

        checks: list[CheckResult] = []
        for surface in sorted(set(positive) & set(negative)):
            pair = self._first_cross_document_pair(positive[surface], negative[surface])
            if pair is None:
                continue
            use, avoid = pair
            checks.append(
                CheckResult(
                    name="conflict.guidance",
                    passed=False,
                    detail=(
                        f"Conflicting guidance for `{surface}`: "
                        f"{use.document.path}:{use.line} recommends it "
                        f"({use.text!r}) but {avoid.document.path}:{avoid.line} "
                        f"advises against it ({avoid.text!r})"
                    ),
                    document=avoid.document.path,
                    line=avoid.line,
                )
            )
        return checks

    @staticmethod
    def _first_cross_document_pair(
        uses: list[_Mention], avoids: list[_Mention]
    ) -> tuple[_Mention, _Mention] | None:
        for use in uses:
            for avoid in avoids:
                if use.document.path != avoid.document.path:
                    return use, avoid
        return None
