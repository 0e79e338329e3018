"""Frontmatter checks for a single skill document.

Checks performed:

1. **metadata.name** -- name is present and non-empty.
2. **metadata.description** -- description is present and non-empty.
3. **metadata.name_format** -- name is lower-case kebab-case.
4. **metadata.agents** -- at least one compatible agent identifier.
5. **metadata.tags** -- at least one tag, no blanks, no duplicates.
"""

from __future__ import annotations

import re

from skilldocs.corpus.models import CheckResult, Severity, SkillDocument

_RE_KEBAB = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


class MetadataChecker:
    """Stateless validator for the metadata block of a :class:`SkillDocument`."""

    def check(self, document: SkillDocument) -> list[CheckResult]:
        checks = [
            self._check_name(document),
            self._check_description(document),
            self._check_name_format(document),
            self._check_agents(document),
            self._check_tags(document),
        ]
        for check in checks:
            check.document = document.path
            check.line = 1
        return checks

    @staticmethod
    def _check_name(document: SkillDocument) -> CheckResult:
        name = document.metadata.name.strip()
        return CheckResult(
            name="metadata.name",
            passed=bool(name),
            detail=f"name: {name}" if name else "Metadata 'name' is empty",
        )

    @staticmethod
    def _check_description(document: SkillDocument) -> CheckResult:
        description = document.metadata.description.strip()
        return CheckResult(
            name="metadata.description",
            passed=bool(description),
            detail=(
                f"{len(description)} characters"
                if description
                else "Metadata 'description' is empty"
            ),
        )

    @staticmethod
    def _check_name_format(document: SkillDocument) -> CheckResult:
        name = document.metadata.name.strip()
        ok = bool(_RE_KEBAB.match(name))
        return CheckResult(
            name="metadata.name_format",
            passed=ok,
            severity=Severity.WARNING,
            detail="OK" if ok else f"Name '{name}' is not lower-case kebab-case",
        )

    @staticmethod
    def _check_agents(document: SkillDocument) -> CheckResult:
        agents = document.metadata.agents
        blank = [a for a in agents if not a.strip()]
        if not agents:
            detail = "No compatible agents declared"
        elif blank:
            detail = "Agent list contains blank identifiers"
        else:
            detail = ", ".join(agents)
        return CheckResult(
            name="metadata.agents",
            passed=bool(agents) and not blank,
            severity=Severity.WARNING,
            detail=detail,
        )

    @staticmethod
    def _check_tags(document: SkillDocument) -> CheckResult:
        tags = document.metadata.tags
        seen: set[str] = set()
        dupes: list[str] = []
        for tag in tags:
            key = tag.strip().lower()
            if key in seen and tag not in dupes:
                dupes.append(tag)
            seen.add(key)
        blank = [t for t in tags if not t.strip()]
        if not tags:
            detail = "No tags declared"
        elif blank:
            detail = "Tag list contains blank entries"
        elif dupes:
            detail = f"Duplicate tags: {', '.join(dupes)}"
        else:
            detail = ", ".join(tags)
        return CheckResult(
            name="metadata.tags",
            passed=bool(tags) and not blank and not dupes,
            severity=Severity.WARNING,
            detail=detail,
        )
