"""Records for the upstream documentation JSON.

The upstream API makes no schema promises, so every model here is lenient:
unknown keys are ignored, every field has a default, and before-validators
coerce wrongly-shaped values to the field's empty value instead of failing.
Only a document whose top level is not an object is rejected (by the caller,
see ``client.py``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_optional_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return None


def _dict_items(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _dict_values(value: Any) -> dict[str, dict]:
    if not isinstance(value, dict):
        return {}
    return {key: node for key, node in value.items() if isinstance(node, dict)}


class _DocsModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AbstractFragment(_DocsModel):
    text: str = ""
    type: str = "text"

    @field_validator("text", "type", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _as_text(v)


class PlatformAvailability(_DocsModel):
    name: str = ""
    introduced_at: str | None = Field(default=None, alias="introducedAt")
    beta: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("introduced_at", mode="before")
    @classmethod
    def _coerce_introduced_at(cls, v: Any) -> str | None:
        return _as_optional_text(v)

    @field_validator("beta", mode="before")
    @classmethod
    def _coerce_beta(cls, v: Any) -> bool:
        return v is True


class Technology(_DocsModel):
    """Single entry in the technology index."""

    title: str = ""
    kind: str = ""
    role: str = ""
    abstract: list[AbstractFragment] = []
    identifier: str = ""
    url: str = ""

    @field_validator("title", "kind", "role", "identifier", "url", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("abstract", mode="before")
    @classmethod
    def _coerce_abstract(cls, v: Any) -> list[dict]:
        return _dict_items(v)

    @property
    def is_framework(self) -> bool:
        return self.kind == "symbol" and self.role == "collection"


class TechnologyIndex(_DocsModel):
    """The technologies document; only its reference map is used."""

    references: dict[str, Technology] = {}

    @field_validator("references", mode="before")
    @classmethod
    def _coerce_references(cls, v: Any) -> dict[str, dict]:
        return _dict_values(v)


class TopicSection(_DocsModel):
    title: str = ""
    identifiers: list[str] = []
    anchor: str | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("identifiers", mode="before")
    @classmethod
    def _coerce_identifiers(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, str)]

    @field_validator("anchor", mode="before")
    @classmethod
    def _coerce_anchor(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None


class Reference(_DocsModel):
    """One node of a document's reference map.

    ``platforms`` stays ``None`` when the node carries no availability data,
    so callers can fall back to the owning framework's platforms.
    """

    title: str = ""
    abstract: list[AbstractFragment] = []
    url: str = ""
    kind: str | None = None
    platforms: list[PlatformAvailability] | None = None

    @field_validator("title", "url", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @field_validator("abstract", mode="before")
    @classmethod
    def _coerce_abstract(cls, v: Any) -> list[dict]:
        return _dict_items(v)

    @field_validator("platforms", mode="before")
    @classmethod
    def _coerce_platforms(cls, v: Any) -> list[dict] | None:
        if not isinstance(v, list):
            return None
        return _dict_items(v)


class DocumentMetadata(_DocsModel):
    title: str = ""
    role: str = ""
    symbol_kind: str | None = Field(default=None, alias="symbolKind")
    platforms: list[PlatformAvailability] = []

    @field_validator("title", "role", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("symbol_kind", mode="before")
    @classmethod
    def _coerce_symbol_kind(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @field_validator("platforms", mode="before")
    @classmethod
    def _coerce_platforms(cls, v: Any) -> list[dict]:
        return _dict_items(v)


class _DocumentationPage(_DocsModel):
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    abstract: list[AbstractFragment] = []
    topic_sections: list[TopicSection] = Field(default=[], alias="topicSections")
    references: dict[str, Reference] = {}

    @field_validator("metadata", mode="before")
    @classmethod
    def _coerce_metadata(cls, v: Any) -> dict:
        return v if isinstance(v, dict) else {}

    @field_validator("abstract", "topic_sections", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[dict]:
        return _dict_items(v)

    @field_validator("references", mode="before")
    @classmethod
    def _coerce_references(cls, v: Any) -> dict[str, dict]:
        return _dict_values(v)


class FrameworkDocument(_DocumentationPage):
    """Full document for one framework (``documentation/<name>.json``)."""


class SymbolDocument(_DocumentationPage):
    """Full document for one symbol, fetched from an arbitrary documentation path."""
