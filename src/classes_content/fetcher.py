"""
Ordered retrieval of the first existing document among candidate URLs.
"""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from typing import Iterable

import httpx

from .cache import ResolutionCache
from .config import DEFAULT_TIMEOUT

logger = logging.getLogger("classes-content")

# Number of candidates echoed in the debug log before a walk
LOG_PREVIEW = 8


class ContentFetcher:
    """Walks candidate URLs in priority order and returns the first hit.

    Each candidate is checked against the negative cache (skipped without
    I/O while fresh), then the positive cache, and only then requested.
    A failed request (non-2xx status, or any error while requesting or
    decoding) is recorded in the negative cache for that exact URL and the walk moves on. Exhausting the
    list is a normal outcome and returns None.

    Args:
        cache: Shared resolution cache
        client: Optional long-lived HTTP client. When omitted, a client is
            opened on the first network request of each walk and closed
            when the walk ends.
        timeout: Transport timeout for clients opened by the fetcher
    """

    def __init__(
        self,
        cache: ResolutionCache,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.cache = cache
        self.timeout = timeout
        self._client = client
        # URLs requested by the most recent resolve_first call
        self.attempted: list[str] = []

    async def resolve_first(
        self,
        candidates: Iterable[str],
        label: str = "",
        attempts: list[str] | None = None,
    ) -> str | None:
        """Return the text of the first retrievable candidate.

        Args:
            candidates: URLs in priority order
            label: Short description used in log messages
            attempts: Optional list that receives every URL actually requested

        Returns:
            Document text, or None when no candidate could be retrieved
        """
        urls = list(candidates)
        self.attempted = []
        logger.debug(
            f"Trying {len(urls)} candidates for {label or 'content'}: {urls[:LOG_PREVIEW]}"
        )

        async with AsyncExitStack() as stack:
            client = self._client
            for url in urls:
                if self.cache.is_negative(url):
                    logger.debug(f"Skip known failure: {url}")
                    continue

                cached = self.cache.get_text(url)
                if cached is not None:
                    return cached

                if client is None:
                    client = await stack.enter_async_context(
                        httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
                    )

                self.attempted.append(url)
                if attempts is not None:
                    attempts.append(url)
                text = await self._fetch(client, url)
                if text is not None:
                    return text

        logger.debug(f"No match for {label or 'content'} (tried {len(urls)} candidates)")
        return None

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> str | None:
        """GET one URL, updating the cache with the outcome."""
        self.cache.record_fetch()
        try:
            response = await client.get(url)
            if not response.is_success:
                self.cache.mark_negative(url)
                logger.debug(f"Not found: HTTP {response.status_code} {url}")
                return None
            text = response.text
        except Exception as e:
            # Any failure is a miss for this location; the walk goes on
            self.cache.mark_negative(url)
            logger.debug(f"Fetch error, continuing: {url} ({e!r})")
            return None

        self.cache.store_text(url, text)
        logger.debug(f"OK: {url}")
        return text


__all__ = ["ContentFetcher"]
