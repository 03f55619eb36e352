"""Background scheduler coroutines."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from appledocs.state import AppState

log = structlog.get_logger()


async def run_cache_purge_scheduler(state: AppState) -> None:
    """Drop stale cache entries on the configured interval until cancelled."""
    interval_seconds = state.settings.cache.purge_interval_minutes * 60

    while True:
        await asyncio.sleep(interval_seconds)
        try:
            removed = state.cache.purge_expired()
        except Exception:
            log.warning("cache_purge_scheduler_error", exc_info=True)
            continue
        if removed:
            log.info("cache_purged", removed=removed)
