from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class DocumentCacheEntry(BaseModel):
    """Cached upstream JSON document for a single URL."""

    url: str
    document: Any  # Raw decoded JSON, validated by the caller on every read
    fetched_at: float  # Clock reading at insert time (cache clock, not wall time)

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return now - self.fetched_at < ttl_seconds
