"""Tool handler for search_symbols.

Receives AppState, validates input, runs a framework-scoped or global search
and returns a structured dict. No MCP or FastMCP imports; server.py handles
the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from appledocs.errors import AppleDocsError, ErrorCode
from appledocs.models.search import SearchFilters
from appledocs.models.tools import SearchSymbolsInput, SearchSymbolsOutput
from appledocs.search import search_framework, search_global

if TYPE_CHECKING:
    from appledocs.state import AppState


async def handle(
    query: str,
    state: AppState,
    *,
    framework: str | None = None,
    symbol_type: str | None = None,
    platform: str | None = None,
    max_results: int | None = None,
) -> dict:
    """Handle a search_symbols tool call."""
    log = structlog.get_logger().bind(tool="search_symbols", query=query, framework=framework)
    log.info("handler_called")

    search_settings = state.settings.search
    if max_results is None:
        max_results = search_settings.default_max_results

    try:
        validated = SearchSymbolsInput(
            query=query,
            framework=framework,
            symbol_type=symbol_type,
            platform=platform,
            max_results=max_results,
        )
        if validated.max_results > search_settings.max_results_limit:
            raise ValueError(
                f"max_results must not exceed {search_settings.max_results_limit}"
            )
    except ValueError as exc:
        raise AppleDocsError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion=(
                "Provide a non-empty query (max 500 chars, wildcards * and ? allowed) "
                f"and max_results between 1 and {search_settings.max_results_limit}."
            ),
            recoverable=False,
        ) from exc

    filters = SearchFilters(symbol_type=validated.symbol_type, platform=validated.platform)

    if validated.framework:
        results = await search_framework(
            state.client,
            validated.framework,
            validated.query,
            filters,
            max_results=validated.max_results,
        )
        scope_description = f"Framework: {validated.framework}"
    else:
        results = await search_global(
            state.client,
            validated.query,
            filters,
            max_results=validated.max_results,
            framework_limit=search_settings.global_framework_limit,
        )
        scope_description = "All frameworks"

    log.info("search_complete", result_count=len(results), scope=scope_description)

    output = SearchSymbolsOutput(
        query=validated.query,
        scope_description=scope_description,
        filters=filters,
        results=results,
    )
    return output.model_dump(mode="json")
