"""Tool handler for get_documentation.

Receives AppState, validates the path and delegates to the resolver, which
always produces one of the three documentation result variants. No MCP or
FastMCP imports; server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from appledocs.errors import AppleDocsError, ErrorCode
from appledocs.models.tools import GetDocumentationInput
from appledocs.resolver import resolve_documentation

if TYPE_CHECKING:
    from appledocs.state import AppState


async def handle(path: str, state: AppState) -> dict:
    """Handle a get_documentation tool call."""
    log = structlog.get_logger().bind(tool="get_documentation", path=path)
    log.info("handler_called")

    try:
        validated = GetDocumentationInput(path=path)
    except ValueError as exc:
        raise AppleDocsError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion=(
                'Provide a documentation path (e.g. "documentation/SwiftUI/View") '
                'or a framework name (e.g. "SwiftUI"), max 500 chars.'
            ),
            recoverable=False,
        ) from exc

    result = await resolve_documentation(
        state.client,
        validated.path,
        suggestion_cutoff=state.settings.search.suggestion_cutoff,
        max_suggestions=state.settings.search.max_suggestions,
    )
    log.info("documentation_resolved", kind=result.kind)
    return result.model_dump(mode="json")
