"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools and render their output as Markdown
- Start the correct transport (stdio or HTTP)
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING, Annotated

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent
from pydantic import Field

import appledocs.tools.get_documentation as t_get_docs
import appledocs.tools.list_technologies as t_list
import appledocs.tools.search_symbols as t_search
from appledocs import __version__
from appledocs.cache import DocumentCache
from appledocs.client import DocsClient
from appledocs.config import Settings
from appledocs.errors import AppleDocsError
from appledocs.fetcher import Fetcher, build_http_client
from appledocs.formatting import (
    render_documentation,
    render_search_results,
    render_technologies,
)
from appledocs.schedulers import run_cache_purge_scheduler
from appledocs.state import AppState
from appledocs.transport import run_http_server

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


def build_state(settings: Settings) -> AppState:
    """Wire the HTTP client, cache, fetcher and document client."""
    http_client = build_http_client(settings.upstream)
    cache = DocumentCache(ttl_seconds=settings.cache.ttl_minutes * 60)
    fetcher = Fetcher(http_client)
    return AppState(
        settings=settings,
        cache=cache,
        fetcher=fetcher,
        client=DocsClient(fetcher, cache, settings.upstream.base_url),
        http_client=http_client,
    )


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        transport=settings.server.transport,
        upstream=settings.upstream.base_url,
    )

    state = build_state(settings)
    cache_purge_task = asyncio.create_task(run_cache_purge_scheduler(state))

    log.info("server_started", version=__version__, transport=settings.server.transport)

    try:
        yield state
    finally:
        cache_purge_task.cancel()
        with suppress(asyncio.CancelledError):
            await cache_purge_task
        if state.http_client is not None:
            await state.http_client.aclose()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("appledocs", lifespan=lifespan)
# FastMCP doesn't expose a version kwarg, so set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: AppleDocsError) -> CallToolResult:
    """Convert an AppleDocsError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


def _log_tool_error(tool: str, exc: AppleDocsError) -> None:
    log.warning(
        "tool_error",
        tool=tool,
        code=exc.code,
        message=exc.message,
        recoverable=exc.recoverable,
    )


@mcp.tool()
async def list_technologies(ctx: Context) -> object:
    """List all available Apple technologies and frameworks."""
    state: AppState = ctx.request_context.lifespan_context
    try:
        output = await t_list.handle(state)
    except AppleDocsError as exc:
        _log_tool_error("list_technologies", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="list_technologies", exc_info=True)
        raise
    return render_technologies(output)


@mcp.tool()
async def get_documentation(
    path: Annotated[
        str,
        Field(
            description=(
                'Documentation path (e.g. "documentation/SwiftUI/View") '
                'or framework name (e.g. "SwiftUI")'
            )
        ),
    ],
    ctx: Context,
) -> object:
    """Get documentation for any symbol, class, struct or framework.

    Framework names are detected automatically and answered with an overview
    of the framework's symbol categories.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        result = await t_get_docs.handle(path, state)
    except AppleDocsError as exc:
        _log_tool_error("get_documentation", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="get_documentation", exc_info=True)
        raise
    return render_documentation(result)


@mcp.tool()
async def search_symbols(
    query: Annotated[str, Field(description="Search query (supports wildcards: * and ?)")],
    ctx: Context,
    framework: Annotated[
        str | None, Field(description="Optional: search within this framework only")
    ] = None,
    symbol_type: Annotated[
        str | None,
        Field(description="Optional: filter by symbol type (class, protocol, struct, etc.)"),
    ] = None,
    platform: Annotated[
        str | None, Field(description="Optional: filter by platform (iOS, macOS, etc.)")
    ] = None,
    max_results: Annotated[
        int | None, Field(description="Optional: maximum number of results (default: 20)")
    ] = None,
) -> object:
    """Search for symbols across Apple frameworks (supports wildcards like "RPBroadcast*")."""
    state: AppState = ctx.request_context.lifespan_context
    try:
        output = await t_search.handle(
            query,
            state,
            framework=framework,
            symbol_type=symbol_type,
            platform=platform,
            max_results=max_results,
        )
    except AppleDocsError as exc:
        _log_tool_error("search_symbols", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="search_symbols", exc_info=True)
        raise
    return render_search_results(output)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()

    if settings.server.transport == "http":
        _setup_logging(settings)
        run_http_server(mcp, settings)
        return

    mcp.run()


if __name__ == "__main__":
    main()
