"""Upstream document access.

DocsClient maps logical resources (technology index, framework, symbol) to
their deterministic JSON URLs, fetches them through the cache and validates
them into the lenient models from ``models.documents``. This is the only
place raw upstream JSON is turned into typed records.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from appledocs.errors import ErrorCode, FetchError
from appledocs.models.documents import (
    FrameworkDocument,
    SymbolDocument,
    Technology,
    TechnologyIndex,
)

if TYPE_CHECKING:
    from appledocs.protocols import CacheProtocol, FetcherProtocol

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class DocsClient:
    def __init__(self, fetcher: FetcherProtocol, cache: CacheProtocol, base_url: str) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._base_url = base_url.rstrip("/")

    # ------------------------------------------------------------------
    # URLs
    # ------------------------------------------------------------------

    def technologies_url(self) -> str:
        return f"{self._base_url}/documentation/technologies.json"

    def framework_url(self, framework_name: str) -> str:
        return f"{self._base_url}/documentation/{framework_name}.json"

    def symbol_url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}.json"

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    async def get_technologies(self) -> dict[str, Technology]:
        """Return the technology index keyed by identifier, in index order."""
        index = await self._get(self.technologies_url(), TechnologyIndex)
        return index.references

    async def get_framework(self, framework_name: str) -> FrameworkDocument:
        return await self._get(self.framework_url(framework_name), FrameworkDocument)

    async def get_symbol(self, path: str) -> SymbolDocument:
        return await self._get(self.symbol_url(path), SymbolDocument)

    async def _get(self, url: str, model: type[_ModelT]) -> _ModelT:
        async def fetch() -> Any:
            data = await self._fetcher.fetch_json(url)
            # Non-object bodies are never cached
            if not isinstance(data, dict):
                raise _malformed(url)
            return data

        data = await self._cache.get_or_fetch(url, fetch)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise _malformed(url) from exc


def _malformed(url: str) -> FetchError:
    return FetchError(
        code=ErrorCode.DOCUMENT_MALFORMED,
        message=f"Unexpected document shape from {url}",
        suggestion="The documentation service returned an unexpected response.",
        resource=url,
    )
