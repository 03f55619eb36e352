"""Input validation and output models for the MCP tools."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from appledocs.models.search import SearchFilters, SearchResult

MAX_QUERY_LENGTH = 500


def _require_text(value: str, field_name: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field_name} must not be empty")
    if len(value) > MAX_QUERY_LENGTH:
        raise ValueError(f"{field_name} must not exceed {MAX_QUERY_LENGTH} characters")
    return value


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


# ---------------------------------------------------------------------------
# list_technologies
# ---------------------------------------------------------------------------


class TechnologySummary(BaseModel):
    name: str
    description: str


class ListTechnologiesOutput(BaseModel):
    frameworks: list[TechnologySummary]
    others: list[TechnologySummary]
    total: int


# ---------------------------------------------------------------------------
# search_symbols
# ---------------------------------------------------------------------------


class SearchSymbolsInput(BaseModel):
    query: str
    framework: str | None = None
    symbol_type: str | None = None
    platform: str | None = None
    max_results: int = Field(default=20, ge=1)

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        return _require_text(v, "query")

    @field_validator("framework", "symbol_type", "platform")
    @classmethod
    def strip_optional(cls, v: str | None) -> str | None:
        return _optional_text(v)


class SearchSymbolsOutput(BaseModel):
    query: str
    scope_description: str
    filters: SearchFilters
    results: list[SearchResult]


# ---------------------------------------------------------------------------
# get_documentation
# ---------------------------------------------------------------------------


class GetDocumentationInput(BaseModel):
    path: str

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        return _require_text(v, "path")


class ReferencePreview(BaseModel):
    title: str
    description: str


class SectionPreview(BaseModel):
    title: str
    items: list[ReferencePreview]
    remaining: int  # Identifiers in the section beyond the previewed ones


class TopicSectionCount(BaseModel):
    title: str
    count: int


class SymbolDocumentation(BaseModel):
    """A symbol document was fetched directly."""

    kind: Literal["symbol"] = "symbol"
    path: str
    title: str
    symbol_kind: str
    platforms: str
    description: str
    sections: list[SectionPreview]


class FrameworkGuidance(BaseModel):
    """The path named a framework rather than a symbol."""

    kind: Literal["framework_detected"] = "framework_detected"
    requested_path: str
    framework: str
    title: str
    description: str
    platforms: str
    topic_sections: list[TopicSectionCount]
    next_steps: list[str]


class NotFoundGuidance(BaseModel):
    """Nothing could be resolved for the path."""

    kind: Literal["not_found"] = "not_found"
    requested_path: str
    common_issues: list[str]
    recommended_actions: list[str]
    suggestions: list[str] = []  # Close technology titles, best first


DocumentationResult = Annotated[
    SymbolDocumentation | FrameworkGuidance | NotFoundGuidance,
    Field(discriminator="kind"),
]
