"""HTTP fetcher for the upstream documentation JSON API.

All network I/O goes through a single Fetcher instance shared across tool
calls. The Fetcher receives an httpx.AsyncClient via constructor injection;
the lifespan owns the client lifecycle. No request is retried; a timeout is
reported like any other fetch failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from appledocs.errors import ErrorCode, FetchError

if TYPE_CHECKING:
    from appledocs.config import UpstreamSettings

log = structlog.get_logger()


def build_http_client(settings: UpstreamSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={
            "User-Agent": settings.user_agent,
            "Referer": settings.referer,
            "DNT": "1",
        },
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


class Fetcher:
    """Fetches and decodes JSON documents, mapping every failure to FetchError."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_json(self, url: str) -> Any:
        """GET ``url`` and return the decoded JSON body.

        Raises FetchError on unusable URLs, timeouts, network errors, non-2xx
        responses and bodies that are not valid JSON.
        """
        try:
            response = await self._client.get(url)
        except httpx.InvalidURL as exc:
            raise FetchError(
                code=ErrorCode.DOCUMENT_FETCH_FAILED,
                message=f"Cannot request {url!r}: {exc}",
                suggestion="Check the path for whitespace or control characters.",
                resource=url,
            ) from exc
        except httpx.TimeoutException as exc:
            raise FetchError(
                code=ErrorCode.DOCUMENT_FETCH_FAILED,
                message=f"Timed out fetching {url}",
                suggestion="The documentation service may be slow. Try again later.",
                resource=url,
                recoverable=True,
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(
                code=ErrorCode.DOCUMENT_FETCH_FAILED,
                message=f"Network error fetching {url}: {exc}",
                suggestion="The documentation service may be temporarily unavailable.",
                resource=url,
                recoverable=True,
            ) from exc

        if response.status_code == 404:
            raise FetchError(
                code=ErrorCode.DOCUMENT_NOT_FOUND,
                message=f"HTTP 404 fetching {url}",
                suggestion="Check the documentation path, e.g. 'documentation/SwiftUI/View'.",
                resource=url,
            )
        if not response.is_success:
            raise FetchError(
                code=ErrorCode.DOCUMENT_FETCH_FAILED,
                message=f"HTTP {response.status_code} fetching {url}",
                suggestion="The documentation service may be temporarily unavailable.",
                resource=url,
                recoverable=True,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise FetchError(
                code=ErrorCode.DOCUMENT_MALFORMED,
                message=f"Response from {url} is not valid JSON",
                suggestion="The documentation service returned an unexpected response.",
                resource=url,
            ) from exc

        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return data
