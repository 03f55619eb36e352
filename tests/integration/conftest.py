"""Integration test fixtures.

Provides a fully wired AppState: real httpx client, Fetcher, DocsClient and
DocumentCache. Tests mock the upstream API with respx.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from appledocs.cache import DocumentCache
from appledocs.client import DocsClient
from appledocs.config import Settings
from appledocs.fetcher import Fetcher, build_http_client
from appledocs.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Overrides any local appledocs.yaml by forcing stdio transport and points
    the upstream at an address that refuses connections.
    """
    env = os.environ.copy()
    env["APPLEDOCS__SERVER__TRANSPORT"] = "stdio"
    env["APPLEDOCS__UPSTREAM__BASE_URL"] = "http://127.0.0.1:1/data"
    return env


@pytest.fixture()
async def app_state() -> AsyncGenerator[AppState, None]:
    """Full AppState wired for handler integration tests."""
    settings = Settings()
    async with build_http_client(settings.upstream) as client:
        cache = DocumentCache(ttl_seconds=settings.cache.ttl_minutes * 60)
        fetcher = Fetcher(client)
        yield AppState(
            settings=settings,
            cache=cache,
            fetcher=fetcher,
            client=DocsClient(fetcher, cache, settings.upstream.base_url),
            http_client=client,
        )
