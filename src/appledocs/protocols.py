"""Protocol interfaces for swappable components.

DocsClient and AppState reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight in-memory fakes
- Future backends (e.g. a shared Redis cache) to be swapped without changing
  search or resolution code
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class CacheProtocol(Protocol):
    """Interface for the upstream document cache."""

    def get(self, url: str) -> Any | None: ...

    def set(self, url: str, document: Any) -> None: ...

    async def get_or_fetch(self, url: str, fetch: Callable[[], Awaitable[Any]]) -> Any: ...

    def purge_expired(self) -> int: ...


class FetcherProtocol(Protocol):
    """Interface for the upstream JSON fetcher."""

    async def fetch_json(self, url: str) -> Any: ...
