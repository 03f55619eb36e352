"""Framework-scoped and global symbol search.

Framework search walks one framework document's reference map; global search
fans the query out over the framework-level technologies in the index,
sequentially, and tolerates individual framework failures.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import structlog

from appledocs.errors import AppleDocsError, ErrorCode, FetchError
from appledocs.formatting import flatten_abstract, format_platforms
from appledocs.matching import compile_pattern, matches_reference, rank
from appledocs.models.search import SearchFilters, SearchResult

if TYPE_CHECKING:
    from appledocs.client import DocsClient

log = structlog.get_logger()

FRAMEWORK_DEFAULT_MAX_RESULTS = 20
GLOBAL_DEFAULT_MAX_RESULTS = 50
GLOBAL_FRAMEWORK_LIMIT = 20
# Each framework may contribute up to a quarter of the overall result limit
GLOBAL_SHARE_DIVISOR = 4


async def search_framework(
    client: DocsClient,
    framework_name: str,
    query: str,
    filters: SearchFilters | None = None,
    *,
    max_results: int = FRAMEWORK_DEFAULT_MAX_RESULTS,
) -> list[SearchResult]:
    """Search one framework's references and return ranked results.

    Collection stops as soon as ``max_results`` references have matched, so
    which references make the cut depends on the document's reference order;
    ranking is applied to the collected set only.

    Raises FetchError (FRAMEWORK_SEARCH_FAILED) if the framework document
    cannot be obtained.
    """
    filters = filters or SearchFilters()
    try:
        framework = await client.get_framework(framework_name)
    except FetchError as exc:
        raise FetchError(
            code=ErrorCode.FRAMEWORK_SEARCH_FAILED,
            message=f"Framework search failed for {framework_name}: {exc.message}",
            suggestion="Check the framework name with list_technologies, or search all frameworks.",
            resource=framework_name,
            recoverable=exc.recoverable,
        ) from exc

    predicate = compile_pattern(query)
    results: list[SearchResult] = []

    for reference in framework.references.values():
        if len(results) >= max_results:
            break
        if not matches_reference(reference, predicate, filters):
            continue
        # An explicit empty list is kept and displays as all platforms
        platforms = (
            framework.metadata.platforms if reference.platforms is None else reference.platforms
        )
        results.append(
            SearchResult(
                title=reference.title,
                description=flatten_abstract(reference.abstract),
                path=reference.url,
                framework=framework_name,
                symbol_kind=reference.kind,
                platforms=format_platforms(platforms),
            )
        )

    return rank(results, query, title=lambda result: result.title)


async def search_global(
    client: DocsClient,
    query: str,
    filters: SearchFilters | None = None,
    *,
    max_results: int = GLOBAL_DEFAULT_MAX_RESULTS,
    framework_limit: int = GLOBAL_FRAMEWORK_LIMIT,
) -> list[SearchResult]:
    """Search across the first ``framework_limit`` frameworks of the technology index.

    Frameworks are visited in index order until ``max_results`` results have
    been gathered. A framework whose search fails is logged and skipped. The
    combined list is truncated, not re-ranked, so cross-framework order
    follows index order.

    Raises AppleDocsError (GLOBAL_SEARCH_FAILED) if the technology index
    itself cannot be fetched.
    """
    try:
        technologies = await client.get_technologies()
    except FetchError as exc:
        raise AppleDocsError(
            code=ErrorCode.GLOBAL_SEARCH_FAILED,
            message=f"Global search failed: {exc.message}",
            suggestion="The technology index is unavailable. Try again later.",
            recoverable=exc.recoverable,
        ) from exc

    frameworks = [tech for tech in technologies.values() if tech.is_framework]
    per_framework = math.ceil(max_results / GLOBAL_SHARE_DIVISOR)

    results: list[SearchResult] = []
    for technology in frameworks[:framework_limit]:
        if len(results) >= max_results:
            break
        try:
            found = await search_framework(
                client,
                technology.title,
                query,
                filters,
                max_results=per_framework,
            )
        except AppleDocsError:
            log.warning("framework_search_failed", framework=technology.title, exc_info=True)
            continue
        results.extend(found)

    log.info(
        "global_search_complete",
        query=query,
        frameworks_considered=min(len(frameworks), framework_limit),
        result_count=min(len(results), max_results),
    )
    return results[:max_results]
