"""Shared test fixtures for the appledocs test suite.

Upstream documents are trimmed-down copies of the real documentation JSON,
keeping only the fields the server reads plus a few malformed nodes.
"""

from __future__ import annotations

from typing import Any

import pytest

from appledocs.cache import DocumentCache
from appledocs.client import DocsClient
from appledocs.errors import ErrorCode, FetchError

BASE_URL = "https://developer.apple.com/tutorials/data"
TECHNOLOGIES_URL = f"{BASE_URL}/documentation/technologies.json"
SWIFTUI_URL = f"{BASE_URL}/documentation/SwiftUI.json"
UIKIT_URL = f"{BASE_URL}/documentation/UIKit.json"
BROKENKIT_URL = f"{BASE_URL}/documentation/BrokenKit.json"
VIEW_SYMBOL_URL = f"{BASE_URL}/documentation/SwiftUI/View.json"


def _abstract(text: str) -> list[dict[str, str]]:
    return [{"text": text, "type": "text"}]


def _ref(title: str, kind: str, url: str, **extra: Any) -> dict[str, Any]:
    return {"title": title, "kind": kind, "url": url, "abstract": _abstract(f"{title} docs."), **extra}


TECHNOLOGIES_DOC: dict[str, Any] = {
    "references": {
        "doc://com.apple.documentation/documentation/SwiftUI": {
            "title": "SwiftUI",
            "kind": "symbol",
            "role": "collection",
            "abstract": _abstract("Declare the user interface and behavior for your app."),
            "identifier": "doc://com.apple.documentation/documentation/SwiftUI",
            "url": "/documentation/swiftui",
        },
        "doc://com.apple.documentation/documentation/UIKit": {
            "title": "UIKit",
            "kind": "symbol",
            "role": "collection",
            "abstract": [
                {"text": "Construct and manage ", "type": "text"},
                {"text": "a graphical, event-driven user interface.", "type": "text"},
            ],
            "identifier": "doc://com.apple.documentation/documentation/UIKit",
            "url": "/documentation/uikit",
        },
        "doc://com.apple.documentation/documentation/HIG": {
            "title": "Human Interface Guidelines",
            "kind": "article",
            "role": "overview",
            "abstract": _abstract("Design guidance for Apple platforms."),
            "url": "/design/human-interface-guidelines",
        },
        "doc://com.apple.documentation/documentation/BrokenKit": {
            "title": "BrokenKit",
            "kind": "symbol",
            "role": "collection",
            "abstract": "not a list",
        },
        "doc://com.apple.documentation/documentation/junk": "not an object",
    }
}

SWIFTUI_DOC: dict[str, Any] = {
    "metadata": {
        "title": "SwiftUI",
        "role": "collection",
        "platforms": [
            {"name": "iOS", "introducedAt": "13.0"},
            {"name": "macOS", "introducedAt": "10.15"},
        ],
    },
    "abstract": _abstract("Declare the user interface and behavior for your app on every platform."),
    "topicSections": [
        {
            "title": "Essentials",
            "identifiers": [
                "doc://SwiftUI/View",
                "doc://SwiftUI/App",
                "doc://SwiftUI/missing",
            ],
        },
        {"title": "Views", "identifiers": ["doc://SwiftUI/Text"]},
        {"title": "Empty"},
    ],
    "references": {
        "doc://SwiftUI/ViewBuilder": _ref(
            "ViewBuilder", "struct", "/documentation/swiftui/viewbuilder"
        ),
        "doc://SwiftUI/AnyView": _ref("AnyView", "struct", "/documentation/swiftui/anyview"),
        "doc://SwiftUI/View": _ref(
            "View",
            "protocol",
            "/documentation/swiftui/view",
            platforms=[
                {"name": "iOS", "introducedAt": "13.0"},
                {"name": "visionOS", "introducedAt": "1.0", "beta": True},
            ],
        ),
        "doc://SwiftUI/Text": _ref(
            "Text",
            "struct",
            "/documentation/swiftui/text",
            platforms=[{"name": "watchOS", "introducedAt": "6.0"}],
        ),
        "doc://SwiftUI/App": _ref("App", "protocol", "/documentation/swiftui/app"),
        "doc://SwiftUI/broken": "not an object",
        "doc://SwiftUI/untitled": {"kind": "struct", "url": "/documentation/swiftui/untitled"},
    },
}

UIKIT_DOC: dict[str, Any] = {
    "metadata": {
        "title": "UIKit",
        "role": "collection",
        "platforms": [{"name": "iOS", "introducedAt": "2.0"}],
    },
    "abstract": _abstract("Construct and manage a graphical, event-driven user interface."),
    "topicSections": [{"title": "View controllers", "identifiers": ["doc://UIKit/UIViewController"]}],
    "references": {
        "doc://UIKit/UIViewController": _ref(
            "UIViewController", "class", "/documentation/uikit/uiviewcontroller"
        ),
        "doc://UIKit/UIView": _ref("UIView", "class", "/documentation/uikit/uiview"),
        "doc://UIKit/UITableViewController": _ref(
            "UITableViewController", "class", "/documentation/uikit/uitableviewcontroller"
        ),
        "doc://UIKit/UIButton": _ref("UIButton", "class", "/documentation/uikit/uibutton"),
        "doc://UIKit/UINavigationController": _ref(
            "UINavigationController", "class", "/documentation/uikit/uinavigationcontroller"
        ),
        "doc://UIKit/UISplitViewController": _ref(
            "UISplitViewController", "class", "/documentation/uikit/uisplitviewcontroller"
        ),
        "doc://UIKit/UIAlertController": _ref(
            "UIAlertController", "class", "/documentation/uikit/uialertcontroller"
        ),
        "doc://UIKit/UIPageViewController": _ref(
            "UIPageViewController", "class", "/documentation/uikit/uipageviewcontroller"
        ),
        "doc://UIKit/UIViewControllerTransitioning": _ref(
            "UIViewControllerTransitioning", "protocol", "/documentation/uikit/transitioning"
        ),
    },
}

VIEW_SYMBOL_DOC: dict[str, Any] = {
    "metadata": {
        "title": "View",
        "symbolKind": "protocol",
        "platforms": [{"name": "iOS", "introducedAt": "13.0"}],
    },
    "abstract": _abstract("A type that represents part of your app's user interface."),
    "primaryContentSections": [],
    "topicSections": [
        {
            "title": "Implementing a custom view",
            "identifiers": [f"doc://SwiftUI/View/item{i}" for i in range(7)],
        },
        {"title": "Deprecated", "identifiers": ["doc://SwiftUI/View/missing"]},
    ],
    "references": {
        f"doc://SwiftUI/View/item{i}": _ref(f"item{i}", "property", f"/documentation/item{i}")
        for i in range(7)
        if i != 2
    },
}


class FakeFetcher:
    """In-memory FetcherProtocol: URL → document, or an exception to raise."""

    def __init__(self, documents: dict[str, Any]) -> None:
        self.documents = documents
        self.calls: list[str] = []

    async def fetch_json(self, url: str) -> Any:
        self.calls.append(url)
        document = self.documents.get(url)
        if document is None:
            raise FetchError(
                code=ErrorCode.DOCUMENT_NOT_FOUND,
                message=f"HTTP 404 fetching {url}",
                suggestion="",
                resource=url,
            )
        if isinstance(document, Exception):
            raise document
        return document


@pytest.fixture()
def upstream_documents() -> dict[str, Any]:
    return {
        TECHNOLOGIES_URL: TECHNOLOGIES_DOC,
        SWIFTUI_URL: SWIFTUI_DOC,
        UIKIT_URL: UIKIT_DOC,
        VIEW_SYMBOL_URL: VIEW_SYMBOL_DOC,
        BROKENKIT_URL: FetchError(
            code=ErrorCode.DOCUMENT_FETCH_FAILED,
            message=f"HTTP 500 fetching {BROKENKIT_URL}",
            suggestion="",
            resource=BROKENKIT_URL,
            recoverable=True,
        ),
    }


@pytest.fixture()
def fake_fetcher(upstream_documents: dict[str, Any]) -> FakeFetcher:
    return FakeFetcher(upstream_documents)


@pytest.fixture()
def docs_client(fake_fetcher: FakeFetcher) -> DocsClient:
    """DocsClient over the fake fetcher with a real cache."""
    return DocsClient(fake_fetcher, DocumentCache(), BASE_URL)
