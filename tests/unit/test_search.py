"""Unit tests for framework and global symbol search."""

from __future__ import annotations

from typing import Any

import pytest

from appledocs.client import DocsClient
from appledocs.errors import AppleDocsError, ErrorCode, FetchError
from appledocs.models.search import SearchFilters
from appledocs.search import search_framework, search_global

BASE_URL = "https://developer.apple.com/tutorials/data"
TECHNOLOGIES_URL = f"{BASE_URL}/documentation/technologies.json"
SWIFTUI_URL = f"{BASE_URL}/documentation/SwiftUI.json"
UIKIT_URL = f"{BASE_URL}/documentation/UIKit.json"
BROKENKIT_URL = f"{BASE_URL}/documentation/BrokenKit.json"


def _titles(results: list) -> list[str]:
    return [result.title for result in results]


class TestSearchFramework:
    async def test_ranks_exact_prefix_contains(self, docs_client: DocsClient) -> None:
        results = await search_framework(docs_client, "SwiftUI", "View")
        assert _titles(results) == ["View", "ViewBuilder", "AnyView"]

    async def test_result_fields(self, docs_client: DocsClient) -> None:
        results = await search_framework(docs_client, "SwiftUI", "View")
        view = results[0]
        assert view.framework == "SwiftUI"
        assert view.path == "/documentation/swiftui/view"
        assert view.symbol_kind == "protocol"
        assert view.description == "View docs."
        assert view.platforms == "iOS 13.0+, visionOS 1.0+ (Beta)"

    async def test_platforms_fall_back_to_framework(self, docs_client: DocsClient) -> None:
        results = await search_framework(docs_client, "SwiftUI", "AnyView")
        assert results[0].platforms == "iOS 13.0+, macOS 10.15+"

    async def test_wildcard_stops_at_max_results(self, docs_client: DocsClient) -> None:
        results = await search_framework(docs_client, "UIKit", "*Controller", max_results=5)
        assert len(results) == 5
        assert set(_titles(results)) == {
            "UIViewController",
            "UITableViewController",
            "UINavigationController",
            "UISplitViewController",
            "UIAlertController",
        }
        assert all("controller" in title.lower() for title in _titles(results))

    async def test_question_mark_matches_single_character(self, docs_client: DocsClient) -> None:
        results = await search_framework(docs_client, "SwiftUI", "T?xt")
        assert _titles(results) == ["Text"]

    async def test_symbol_type_filter(self, docs_client: DocsClient) -> None:
        results = await search_framework(
            docs_client, "SwiftUI", "*", SearchFilters(symbol_type="protocol")
        )
        assert _titles(results) == ["View", "App"]

    async def test_platform_filter_uses_reference_platforms_only(
        self, docs_client: DocsClient
    ) -> None:
        results = await search_framework(docs_client, "SwiftUI", "*", SearchFilters(platform="ios"))
        # References without their own availability data never pass a platform filter
        assert _titles(results) == ["View"]

    async def test_platform_filter_substring(self, docs_client: DocsClient) -> None:
        results = await search_framework(
            docs_client, "SwiftUI", "*", SearchFilters(platform="watch")
        )
        assert _titles(results) == ["Text"]

    async def test_untitled_and_malformed_references_skipped(
        self, docs_client: DocsClient
    ) -> None:
        results = await search_framework(docs_client, "SwiftUI", "*")
        assert _titles(results) == ["ViewBuilder", "AnyView", "View", "Text", "App"]

    async def test_no_matches(self, docs_client: DocsClient) -> None:
        assert await search_framework(docs_client, "SwiftUI", "Nope") == []

    async def test_fetch_failure_wrapped(self, docs_client: DocsClient) -> None:
        with pytest.raises(FetchError) as exc_info:
            await search_framework(docs_client, "BrokenKit", "View")
        assert exc_info.value.code == ErrorCode.FRAMEWORK_SEARCH_FAILED
        assert exc_info.value.resource == "BrokenKit"
        assert exc_info.value.recoverable is True
        assert isinstance(exc_info.value.__cause__, FetchError)


class TestSearchGlobal:
    async def test_merges_frameworks_and_skips_failures(
        self, docs_client: DocsClient, fake_fetcher: Any
    ) -> None:
        results = await search_global(docs_client, "View", max_results=8)
        assert _titles(results) == ["ViewBuilder", "AnyView", "UIViewController", "UIView"]
        assert BROKENKIT_URL in fake_fetcher.calls

    async def test_per_framework_share(self, docs_client: DocsClient) -> None:
        results = await search_global(docs_client, "View", max_results=4)
        assert _titles(results) == ["ViewBuilder", "UIViewController"]

    async def test_stops_once_budget_reached(
        self, docs_client: DocsClient, fake_fetcher: Any
    ) -> None:
        results = await search_global(docs_client, "View", max_results=2)
        assert len(results) == 2
        assert BROKENKIT_URL not in fake_fetcher.calls

    async def test_never_exceeds_max_results(self, docs_client: DocsClient) -> None:
        results = await search_global(docs_client, "*", max_results=3)
        assert len(results) <= 3

    async def test_framework_limit(self, docs_client: DocsClient, fake_fetcher: Any) -> None:
        results = await search_global(docs_client, "View", max_results=8, framework_limit=1)
        assert {result.framework for result in results} == {"SwiftUI"}
        assert UIKIT_URL not in fake_fetcher.calls

    async def test_non_frameworks_not_searched(
        self, docs_client: DocsClient, fake_fetcher: Any
    ) -> None:
        await search_global(docs_client, "View", max_results=8)
        searched = [url for url in fake_fetcher.calls if url != TECHNOLOGIES_URL]
        assert searched == [SWIFTUI_URL, UIKIT_URL, BROKENKIT_URL]

    async def test_all_frameworks_failing_returns_empty(
        self, docs_client: DocsClient, upstream_documents: dict[str, Any]
    ) -> None:
        del upstream_documents[SWIFTUI_URL]
        del upstream_documents[UIKIT_URL]
        assert await search_global(docs_client, "View") == []

    async def test_index_failure_raises(
        self, docs_client: DocsClient, upstream_documents: dict[str, Any]
    ) -> None:
        del upstream_documents[TECHNOLOGIES_URL]
        with pytest.raises(AppleDocsError) as exc_info:
            await search_global(docs_client, "View")
        assert exc_info.value.code == ErrorCode.GLOBAL_SEARCH_FAILED


class TestResultPlatforms:
    async def test_explicit_empty_platforms_not_replaced(
        self, docs_client: DocsClient, upstream_documents: dict[str, Any]
    ) -> None:
        upstream_documents[f"{BASE_URL}/documentation/EmptyKit.json"] = {
            "metadata": {"platforms": [{"name": "iOS", "introducedAt": "17.0"}]},
            "references": {
                "doc://EmptyKit/Bare": {"title": "Bare", "platforms": []},
                "doc://EmptyKit/Absent": {"title": "Absent"},
            },
        }
        results = await search_framework(docs_client, "EmptyKit", "*")
        platforms = {result.title: result.platforms for result in results}
        assert platforms == {"Bare": "All platforms", "Absent": "iOS 17.0+"}
