from __future__ import annotations

from appledocs.models.cache import DocumentCacheEntry
from appledocs.models.documents import (
    AbstractFragment,
    DocumentMetadata,
    FrameworkDocument,
    PlatformAvailability,
    Reference,
    SymbolDocument,
    Technology,
    TechnologyIndex,
    TopicSection,
)
from appledocs.models.search import SearchFilters, SearchResult
from appledocs.models.tools import (
    DocumentationResult,
    FrameworkGuidance,
    GetDocumentationInput,
    ListTechnologiesOutput,
    NotFoundGuidance,
    SearchSymbolsInput,
    SearchSymbolsOutput,
    SymbolDocumentation,
    TechnologySummary,
)

__all__ = [
    # documents
    "AbstractFragment",
    "PlatformAvailability",
    "Technology",
    "TechnologyIndex",
    "TopicSection",
    "Reference",
    "DocumentMetadata",
    "FrameworkDocument",
    "SymbolDocument",
    # cache
    "DocumentCacheEntry",
    # search
    "SearchFilters",
    "SearchResult",
    # tools
    "TechnologySummary",
    "ListTechnologiesOutput",
    "SearchSymbolsInput",
    "SearchSymbolsOutput",
    "GetDocumentationInput",
    "SymbolDocumentation",
    "FrameworkGuidance",
    "NotFoundGuidance",
    "DocumentationResult",
]
