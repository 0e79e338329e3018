"""Link checker -- verifies that documented links resolve.

By default only links under a heading titled exactly "References" are
checked, since those are the ones a reader (or an agent) is told to follow.
Remote links are probed with ``HEAD`` (falling back to ``GET`` when the
server refuses ``HEAD``).  Local links must exist on disk; they are resolved
against the document's own directory, a leading ``/`` included, so results
do not depend on where the linter runs.  ``#fragment`` links must match a
heading in the same document.
"""

from __future__ import annotations

import asyncio
import re
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator
from urllib.parse import unquote, urlsplit

import httpx

from skilldocs.config import Settings
from skilldocs.corpus.models import CheckResult, Link, Severity, SkillDocument
from skilldocs.utils.exceptions import LinkCheckError
from skilldocs.utils.logging import get_logger

logger = get_logger("engine.links")

_RE_REFERENCES = re.compile(r"^references$", re.IGNORECASE)
_HEAD_REFUSED = {405, 501}
_UNCHECKED_SCHEMES = {"mailto", "tel", "ftp", "data"}


class LinkChecker:
    """Check the links of skill documents.

    Parameters
    ----------
    timeout:
        Per-request timeout in seconds.
    concurrency:
        Maximum number of HTTP requests in flight.
    check_all:
        Check every link instead of only those under "References".
    transport:
        Optional ``httpx`` transport, e.g. :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        concurrency: int = 8,
        user_agent: str = "skilldocs-linkcheck/0.1",
        check_all: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.concurrency = max(1, concurrency)
        self.user_agent = user_agent
        self.check_all = check_all
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._semaphore: asyncio.Semaphore | None = None
        self._cache: dict[str, asyncio.Future] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> LinkChecker:
        return cls(
            timeout=settings.link_timeout_seconds,
            concurrency=settings.link_concurrency,
            user_agent=settings.user_agent,
            check_all=settings.check_all_links,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def session(self) -> AsyncIterator[LinkChecker]:
        """Share one HTTP client and one result cache across many documents."""
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        ) as client:
            self._client = client
            self._semaphore = asyncio.Semaphore(self.concurrency)
            self._cache = {}
            try:
                yield self
            finally:
                self._client = None
                self._semaphore = None
                self._cache = {}

    def select(self, document: SkillDocument) -> list[Link]:
        """Return the links of *document* that fall under the check scope."""
        if self.check_all:
            return list(document.parsed.links)
        return [link for link in document.parsed.links if _RE_REFERENCES.match(link.section.strip())]

    async def check_document(self, document: SkillDocument) -> list[CheckResult]:
        """Check every in-scope link of *document*."""
        if self._client is None:
            async with self.session():
                return await self._check_links(document)
        return await self._check_links(document)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _check_links(self, document: SkillDocument) -> list[CheckResult]:
        links = self.select(document)
        results = await asyncio.gather(*(self._check_link(document, link) for link in links))
        failed = sum(1 for r in results if not r.passed)
        logger.debug("links_checked", document=document.path, total=len(results), failed=failed)
        return list(results)

    async def _check_link(self, document: SkillDocument, link: Link) -> CheckResult:
        url = link.url.strip()
        result = CheckResult(name="link.reachable", passed=True, document=document.path, line=link.line)

        if not url:
            result.passed = False
            result.detail = "Empty link target"
            return result

        parts = urlsplit(url)
        scheme = parts.scheme.lower()

        if scheme in ("http", "https"):
            result.passed, result.detail = await self._check_remote(url)
        elif scheme in _UNCHECKED_SCHEMES:
            result.severity = Severity.INFO
            result.detail = f"{url}: not checked"
        elif scheme and len(scheme) > 1:
            result.severity = Severity.INFO
            result.detail = f"{url}: unsupported scheme '{scheme}'"
        elif url.startswith("#"):
            result.passed, result.detail = self._check_fragment(document, url[1:])
        else:
            result.passed, result.detail = self._check_local(document, parts.path)
        return result

    @staticmethod
    def _check_fragment(document: SkillDocument, fragment: str) -> tuple[bool, str]:
        slug = unquote(fragment).lower()
        if slug in document.parsed.slugs():
            return True, f"#{fragment}: heading found"
        return False, f"#{fragment}: no heading with that anchor"

    @staticmethod
    def _check_local(document: SkillDocument, path: str) -> tuple[bool, str]:
        target = unquote(path)
        if not target:
            return False, "Empty link path"
        base = Path(document.path).parent
        resolved = base / target.lstrip("/")
        if resolved.exists():
            return True, f"{path}: exists"
        return False, f"{path}: file not found ({resolved})"

    async def _check_remote(self, url: str) -> tuple[bool, str]:
        if self._client is None:
            raise LinkCheckError(url, "no open link-check session")
        future = self._cache.get(url)
        if future is None:
            future = asyncio.ensure_future(self._fetch(url))
            self._cache[url] = future
        return await future

    async def _fetch(self, url: str) -> tuple[bool, str]:
        async with self._semaphore:
            try:
                response = await self._client.head(url)
                if response.status_code in _HEAD_REFUSED:
                    response = await self._client.get(url)
            except httpx.HTTPError as exc:
                logger.warning("link_unreachable", url=url, error=type(exc).__name__)
                return False, f"{url}: {type(exc).__name__}: {exc}"

        status = response.status_code
        if status < 400:
            return True, f"{url}: {status}"
        logger.warning("link_broken", url=url, status_code=status)
        return False, f"{url}: HTTP {status}"
