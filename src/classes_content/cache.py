"""
Two-tier cache for remote content lookups.

Positive entries map a location to its text and never expire within the
process. Negative entries record when a location last failed and expire
after a TTL, so repeated 404s are not re-requested on every call while a
newly published file is still picked up a few minutes later.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from .config import NEGATIVE_TTL_SECONDS
from .models import CacheStats

logger = logging.getLogger("classes-content")


class ResolutionCache:
    """Positive content cache plus negative miss cache with TTL.

    Keys are full candidate URLs. The cache has no locking: concurrent
    resolutions may both fetch and both store the same location, which is
    harmless because content at a location is stable.

    Usage:
        cache = ResolutionCache(negative_ttl=300)

        if cache.is_negative(url):
            ...  # skip without I/O
        text = cache.get_text(url)
        cache.store_text(url, "# Paladin ...")
        cache.mark_negative(url)

        cache.clear()  # test isolation
    """

    def __init__(
        self,
        negative_ttl: float = NEGATIVE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an empty cache.

        Args:
            negative_ttl: Seconds during which a failed location is skipped.
            clock: Monotonic time source, injectable for tests.
        """
        self.negative_ttl = negative_ttl
        self._clock = clock
        self._texts: dict[str, str] = {}
        self._failures: dict[str, float] = {}
        self._hit_count = 0
        self._skip_count = 0
        self._fetch_count = 0
        self._failure_count = 0

    def get_text(self, url: str) -> str | None:
        """Cached content for a location, or None."""
        text = self._texts.get(url)
        if text is not None:
            self._hit_count += 1
            logger.debug(f"Content cache: hit {url}")
        return text

    def store_text(self, url: str, text: str) -> None:
        """Cache content for a location and forget any earlier failure."""
        self._texts[url] = text
        self._failures.pop(url, None)

    def is_negative(self, url: str) -> bool:
        """Whether a location failed less than `negative_ttl` seconds ago.

        Expired entries are removed on access.
        """
        failed_at = self._failures.get(url)
        if failed_at is None:
            return False
        if self._clock() - failed_at >= self.negative_ttl:
            del self._failures[url]
            logger.debug(f"Content cache: negative entry expired for {url}")
            return False
        self._skip_count += 1
        return True

    def mark_negative(self, url: str) -> None:
        """Record a failed retrieval for a location."""
        self._failures[url] = self._clock()
        self._failure_count += 1

    def record_fetch(self) -> None:
        self._fetch_count += 1

    def clear(self) -> None:
        """Drop both tiers. Statistics counters are reset as well."""
        count = len(self._texts) + len(self._failures)
        self._texts.clear()
        self._failures.clear()
        self._hit_count = 0
        self._skip_count = 0
        self._fetch_count = 0
        self._failure_count = 0
        if count > 0:
            logger.debug(f"Content cache: cleared {count} entries")

    def get_stats(self) -> CacheStats:
        return CacheStats(
            positive_entries=len(self._texts),
            negative_entries=len(self._failures),
            hit_count=self._hit_count,
            skip_count=self._skip_count,
            fetch_count=self._fetch_count,
            failure_count=self._failure_count,
        )

    @property
    def size(self) -> int:
        """Number of positive plus negative entries."""
        return len(self._texts) + len(self._failures)


__all__ = ["ResolutionCache"]
