"""Documentation lookup with framework fallback.

A direct symbol fetch is tried first. When it fails, the requested path is
checked against the technology index: if it names a known technology, the
framework document is fetched and returned as guidance; otherwise (or if
that second fetch fails too) a not-found guidance payload is returned. Fetch
failures never escape ``resolve_documentation``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog
from rapidfuzz import fuzz, process

from appledocs.errors import FetchError
from appledocs.formatting import flatten_abstract, format_platforms
from appledocs.models.tools import (
    FrameworkGuidance,
    NotFoundGuidance,
    ReferencePreview,
    SectionPreview,
    SymbolDocumentation,
    TopicSectionCount,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from appledocs.client import DocsClient
    from appledocs.models.documents import SymbolDocument, Technology
    from appledocs.models.tools import DocumentationResult

log = structlog.get_logger()

DOCUMENTATION_PREFIX = "documentation/"
SECTION_PREVIEW_LIMIT = 5

_WHITESPACE = re.compile(r"\s+")


def split_path(path: str) -> tuple[str, str]:
    """Return ``(candidate, cleaned_path)`` for a documentation path.

    ``"documentation/SwiftUI/View"`` → ``("SwiftUI", "SwiftUI/View")``
    """
    cleaned = path.lstrip("/")
    if cleaned.startswith(DOCUMENTATION_PREFIX):
        cleaned = cleaned[len(DOCUMENTATION_PREFIX) :]
    return cleaned.split("/")[0], cleaned


def _compact(text: str) -> str:
    return _WHITESPACE.sub("", text.lower())


def detect_framework(path: str, technologies: Iterable[Technology]) -> str | None:
    """Return the title of the first technology the path names, or None.

    Both the first path segment and the whole cleaned path are compared,
    case-insensitively, as-is and with all whitespace removed
    (``"FoundationModels"`` finds ``"Foundation Models"``).
    """
    candidate, cleaned = split_path(path)
    exact = {candidate.lower(), cleaned.lower()}
    compact = {_compact(candidate), _compact(cleaned)}

    for technology in technologies:
        if not technology.title:
            continue
        if technology.title.lower() in exact or _compact(technology.title) in compact:
            return technology.title
    return None


def suggest_technologies(
    path: str,
    technologies: Iterable[Technology],
    *,
    score_cutoff: int = 70,
    limit: int = 5,
) -> list[str]:
    """Fuzzy-match the path's first segment against technology titles.

    Returns distinct titles sorted by similarity descending.
    """
    candidate, _ = split_path(path)
    titles = list(dict.fromkeys(tech.title for tech in technologies if tech.title))
    if not candidate or not titles or limit <= 0:
        return []

    results = process.extract(
        _compact(candidate),
        [_compact(title) for title in titles],
        scorer=fuzz.ratio,
        limit=limit,
        score_cutoff=score_cutoff,
    )
    return [titles[idx] for _choice, _score, idx in results]


async def resolve_documentation(
    client: DocsClient,
    path: str,
    *,
    suggestion_cutoff: int = 70,
    max_suggestions: int = 5,
) -> DocumentationResult:
    """Fetch documentation for ``path``, falling back to framework guidance."""
    try:
        symbol = await client.get_symbol(path)
    except FetchError as exc:
        log.info("symbol_fetch_failed", path=path, code=exc.code)
        return await _resolve_fallback(
            client,
            path,
            suggestion_cutoff=suggestion_cutoff,
            max_suggestions=max_suggestions,
        )
    return build_symbol_documentation(path, symbol)


async def _resolve_fallback(
    client: DocsClient,
    path: str,
    *,
    suggestion_cutoff: int,
    max_suggestions: int,
) -> FrameworkGuidance | NotFoundGuidance:
    try:
        technologies = list((await client.get_technologies()).values())
    except FetchError:
        log.warning("fallback_technology_index_unavailable", path=path, exc_info=True)
        return build_not_found(path)

    framework_name = detect_framework(path, technologies)
    if framework_name is None:
        log.info("fallback_no_framework_detected", path=path)
        suggestions = suggest_technologies(
            path,
            technologies,
            score_cutoff=suggestion_cutoff,
            limit=max_suggestions,
        )
        return build_not_found(path, suggestions)

    try:
        framework = await client.get_framework(framework_name)
    except FetchError:
        log.warning(
            "fallback_framework_fetch_failed",
            path=path,
            framework=framework_name,
            exc_info=True,
        )
        return build_not_found(path)

    log.info("fallback_framework_detected", path=path, framework=framework_name)
    return FrameworkGuidance(
        requested_path=path,
        framework=framework_name,
        title=framework.metadata.title or framework_name,
        description=flatten_abstract(framework.abstract),
        platforms=format_platforms(framework.metadata.platforms),
        topic_sections=[
            TopicSectionCount(title=section.title, count=len(section.identifiers))
            for section in framework.topic_sections
        ],
        next_steps=[
            f"Browse symbols: use `documentation/{framework_name}/[SymbolName]`",
            "Search symbols: use `search_symbols` with a specific symbol name",
            f"Explore framework: use `search_symbols` with `framework={framework_name}`",
        ],
    )


def build_symbol_documentation(path: str, symbol: SymbolDocument) -> SymbolDocumentation:
    """Project a symbol document into its tool output, previewing each topic section."""
    sections = []
    for section in symbol.topic_sections:
        items = []
        for identifier in section.identifiers[:SECTION_PREVIEW_LIMIT]:
            reference = symbol.references.get(identifier)
            if reference is None:
                continue
            items.append(
                ReferencePreview(
                    title=reference.title,
                    description=flatten_abstract(reference.abstract),
                )
            )
        sections.append(
            SectionPreview(
                title=section.title,
                items=items,
                remaining=max(len(section.identifiers) - SECTION_PREVIEW_LIMIT, 0),
            )
        )

    return SymbolDocumentation(
        path=path,
        title=symbol.metadata.title or "Symbol",
        symbol_kind=symbol.metadata.symbol_kind or "Unknown",
        platforms=format_platforms(symbol.metadata.platforms),
        description=flatten_abstract(symbol.abstract),
        sections=sections,
    )


def build_not_found(path: str, suggestions: list[str] | None = None) -> NotFoundGuidance:
    return NotFoundGuidance(
        requested_path=path,
        common_issues=[
            "Incorrect path format: expected `documentation/Framework/Symbol`",
            f'Framework vs symbol: "{path}" may be a framework name rather than a symbol',
            'Case sensitivity: ensure proper capitalization (e.g. "SwiftUI" not "swiftui")',
        ],
        recommended_actions=[
            "List frameworks: use `list_technologies` to see available frameworks",
            "Browse a framework: use `get_documentation <name>` to explore its structure",
            "Search symbols: use `search_symbols <query>` to find specific symbols",
            'Example search: `search_symbols "View"` to find View-related symbols',
        ],
        suggestions=suggestions or [],
    )
