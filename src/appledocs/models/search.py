from __future__ import annotations

from pydantic import BaseModel


class SearchFilters(BaseModel):
    """Optional filters applied to every candidate reference."""

    symbol_type: str | None = None  # Exact, case-sensitive match against Reference.kind
    platform: str | None = None  # Case-insensitive substring of a platform name


class SearchResult(BaseModel):
    """Single search hit. Built per call, never persisted."""

    title: str
    description: str
    path: str
    framework: str  # Name the search was performed under
    symbol_kind: str | None = None
    platforms: str | None = None  # Display text, see formatting.format_platforms
