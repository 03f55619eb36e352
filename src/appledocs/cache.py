"""In-memory upstream document cache with a fixed time-to-live.

Entries are keyed by fetch URL. An entry older than the TTL reads as a miss
and is overwritten by the next successful fetch; ``purge_expired`` removes
such entries so long-running processes do not grow without bound. Failed
fetches are never cached.

The clock is injectable (``time.monotonic`` by default) so tests can move
time forward deterministically.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any

import structlog

from appledocs.models.cache import DocumentCacheEntry

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = structlog.get_logger()

DEFAULT_TTL_SECONDS = 10 * 60


class DocumentCache:
    """Process-wide document cache implementing CacheProtocol."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, DocumentCacheEntry] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, url: str) -> Any | None:
        """Return the cached document, or ``None`` if absent or stale."""
        entry = self._entries.get(url)
        if entry is None or not entry.is_fresh(self._clock(), self._ttl_seconds):
            return None
        return entry.document

    def set(self, url: str, document: Any) -> None:
        self._entries[url] = DocumentCacheEntry(
            url=url,
            document=document,
            fetched_at=self._clock(),
        )

    async def get_or_fetch(self, url: str, fetch: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached document for ``url``, fetching it on a miss.

        Concurrent misses for the same URL share one fetch: the first caller
        fetches while holding the per-URL lock, later callers re-check the
        cache once they acquire it. Exceptions from ``fetch`` propagate and
        leave the cache untouched.
        """
        document = self.get(url)
        if document is not None:
            log.debug("cache_hit", url=url)
            return document

        lock = self._locks.setdefault(url, asyncio.Lock())
        try:
            async with lock:
                document = self.get(url)
                if document is not None:
                    log.debug("cache_hit", url=url, waited=True)
                    return document

                log.debug("cache_miss", url=url)
                document = await fetch()
                self.set(url, document)
                return document
        finally:
            # A lock only outlives its call while an entry exists for the URL
            if url not in self._entries and not lock.locked() and self._locks.get(url) is lock:
                del self._locks[url]

    def purge_expired(self) -> int:
        """Drop stale entries and their idle locks. Returns the number removed."""
        now = self._clock()
        expired = [
            url
            for url, entry in self._entries.items()
            if not entry.is_fresh(now, self._ttl_seconds)
        ]
        for url in expired:
            del self._entries[url]
        idle = [
            url
            for url, lock in self._locks.items()
            if url not in self._entries and not lock.locked()
        ]
        for url in idle:
            del self._locks[url]

        log.debug("cache_purge_complete", removed=len(expired), remaining=len(self._entries))
        return len(expired)
