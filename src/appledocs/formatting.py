"""Text helpers and Markdown rendering for tool outputs.

The helpers at the top are shared with search and resolution (display text
inside SearchResult and guidance payloads). The ``render_*`` functions turn a
handler's JSON-mode output dict into the Markdown returned to the client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from appledocs.models.documents import AbstractFragment, PlatformAvailability

ALL_PLATFORMS = "All platforms"

TECHNOLOGY_LIST_FRAMEWORK_LIMIT = 15
TECHNOLOGY_LIST_OTHER_LIMIT = 10
SECTION_ITEM_DESCRIPTION_LIMIT = 100
SEARCH_DESCRIPTION_LIMIT = 150


# =============================================================================
# Text helpers
# =============================================================================


def flatten_abstract(abstract: Iterable[AbstractFragment] | None) -> str:
    """Join abstract fragments into plain text. Empty string when absent."""
    if not abstract:
        return ""
    return "".join(fragment.text for fragment in abstract)


def format_platforms(platforms: Iterable[PlatformAvailability] | None) -> str:
    """Render availability as ``"iOS 13.0+, macOS 10.15+ (Beta)"``."""
    rendered = []
    for platform in platforms or ():
        text = platform.name
        if platform.introduced_at:
            text = f"{text} {platform.introduced_at}+"
        if platform.beta:
            text = f"{text} (Beta)"
        rendered.append(text)
    return ", ".join(rendered) if rendered else ALL_PLATFORMS


def truncate(text: str, limit: int) -> str:
    return f"{text[:limit]}..." if len(text) > limit else text


# =============================================================================
# list_technologies
# =============================================================================


def render_technologies(output: dict[str, Any]) -> str:
    frameworks = output["frameworks"]
    others = output["others"]
    lines = [
        "# Apple Developer Technologies\n",
        "## Core Frameworks\n",
        *(
            f"• **{item['name']}** - {item['description']}"
            for item in frameworks[:TECHNOLOGY_LIST_FRAMEWORK_LIMIT]
        ),
        "\n## Additional Technologies\n",
        *(
            f"• **{item['name']}** - {item['description']}"
            for item in others[:TECHNOLOGY_LIST_OTHER_LIMIT]
        ),
        "\n*Use `get_documentation <name>` to explore any framework or symbol*",
        f"\n\n**Total: {output['total']} technologies available**",
    ]
    return "\n".join(lines)


# =============================================================================
# get_documentation
# =============================================================================


def render_documentation(result: dict[str, Any]) -> str:
    kind = result["kind"]
    if kind == "symbol":
        return _render_symbol(result)
    if kind == "framework_detected":
        return _render_framework_guidance(result)
    return _render_not_found(result)


def _render_symbol(result: dict[str, Any]) -> str:
    lines = [
        f"# {result['title']}\n",
        f"**Type:** {result['symbol_kind']}",
        f"**Platforms:** {result['platforms']}\n",
        "## Overview",
        result["description"],
    ]
    if result["sections"]:
        lines.append("\n## API Reference\n")
        for section in result["sections"]:
            lines.append(f"### {section['title']}")
            for item in section["items"]:
                description = truncate(item["description"], SECTION_ITEM_DESCRIPTION_LIMIT)
                lines.append(f"• **{item['title']}** - {description}")
            if section["remaining"] > 0:
                lines.append(f"*... and {section['remaining']} more items*")
            lines.append("")
    return "\n".join(lines)


def _render_framework_guidance(result: dict[str, Any]) -> str:
    framework = result["framework"]
    lines = [
        f"# Framework Detected: {result['title']}\n",
        "**You searched for a framework instead of a specific symbol.**",
        "To access symbols within this framework, use the format: **framework/symbol**",
        f"**Example:** `documentation/{framework}/View` instead of `{result['requested_path']}`\n",
        f"**Platforms:** {result['platforms']}\n",
        "## Framework Overview",
        result["description"],
        "\n## Available Symbol Categories\n",
        *(
            f"• **{section['title']}** ({section['count']} symbols)"
            for section in result["topic_sections"]
        ),
        "\n## Next Steps",
        *(f"• {step}" for step in result["next_steps"]),
    ]
    return "\n".join(lines)


def _render_not_found(result: dict[str, Any]) -> str:
    lines = [
        f"# Symbol Not Found: {result['requested_path']}\n",
        "The requested symbol could not be located in Apple's documentation.",
    ]
    if result["suggestions"]:
        lines.append("\n## Did You Mean")
        lines.extend(f"• {name}" for name in result["suggestions"])
    lines.append("\n## Common Issues")
    lines.extend(f"• {issue}" for issue in result["common_issues"])
    lines.append("\n## Recommended Actions")
    lines.extend(f"• {action}" for action in result["recommended_actions"])
    return "\n".join(lines)


# =============================================================================
# search_symbols
# =============================================================================


def render_search_results(output: dict[str, Any]) -> str:
    filters = output["filters"]
    header = [
        f'# Search Results for "{output["query"]}"\n',
        f"**Scope:** {output['scope_description']}",
        f"**Symbol Type:** {filters['symbol_type']}" if filters["symbol_type"] else "",
        f"**Platform:** {filters['platform']}" if filters["platform"] else "",
        f"**Found:** {len(output['results'])} results\n",
    ]
    lines = [line for line in header if line]

    if not output["results"]:
        lines.extend([
            "## No Results Found\n",
            "Try:",
            "• Broader search terms",
            '• Wildcard patterns (e.g., "UI*", "*View*")',
            "• Removing filters",
        ])
        return "\n".join(lines)

    lines.append("## Results\n")
    for index, result in enumerate(output["results"], start=1):
        lines.append(f"### {index}. {result['title']}")
        kind = f" | **Type:** {result['symbol_kind']}" if result["symbol_kind"] else ""
        lines.append(f"**Framework:** {result['framework']}{kind}")
        if result["platforms"]:
            lines.append(f"**Platforms:** {result['platforms']}")
        lines.append(f"**Path:** `{result['path']}`")
        if result["description"]:
            lines.append(truncate(result["description"], SEARCH_DESCRIPTION_LIMIT))
        lines.append("")
    lines.append("*Use `get_documentation` with any path above to see detailed documentation*")
    return "\n".join(lines)
