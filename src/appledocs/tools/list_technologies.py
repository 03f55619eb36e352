"""Tool handler for list_technologies.

Receives AppState, groups the technology index into frameworks and other
technologies, and returns a structured dict. No MCP or FastMCP imports;
server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from appledocs.errors import AppleDocsError, FetchError
from appledocs.formatting import flatten_abstract
from appledocs.models.tools import ListTechnologiesOutput, TechnologySummary

if TYPE_CHECKING:
    from appledocs.state import AppState


async def handle(state: AppState) -> dict:
    """Handle a list_technologies tool call."""
    log = structlog.get_logger().bind(tool="list_technologies")
    log.info("handler_called")

    try:
        technologies = await state.client.get_technologies()
    except FetchError as exc:
        raise AppleDocsError(
            code=exc.code,
            message=f"Could not load the technology index: {exc.message}",
            suggestion=exc.suggestion,
            recoverable=exc.recoverable,
        ) from exc

    frameworks: list[TechnologySummary] = []
    others: list[TechnologySummary] = []
    for technology in technologies.values():
        summary = TechnologySummary(
            name=technology.title,
            description=flatten_abstract(technology.abstract),
        )
        if technology.is_framework:
            frameworks.append(summary)
        else:
            others.append(summary)

    log.info("list_complete", framework_count=len(frameworks), other_count=len(others))

    output = ListTechnologiesOutput(
        frameworks=frameworks,
        others=others,
        total=len(frameworks) + len(others),
    )
    return output.model_dump(mode="json")
