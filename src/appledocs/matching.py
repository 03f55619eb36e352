"""Wildcard matching, reference filtering and match-quality ranking.

Pure business logic: operates on validated records, no I/O.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from appledocs.models.documents import Reference
    from appledocs.models.search import SearchFilters


WILDCARD_CHARS = "*?"

SCORE_EXACT = 0
SCORE_PREFIX = 1
SCORE_CONTAINS = 2
SCORE_PATTERN = 3

_T = TypeVar("_T")


def compile_pattern(query: str) -> Callable[[str], bool]:
    """Compile a glob-style query into a case-insensitive title predicate.

    ``*`` matches any run of characters, ``?`` exactly one character, and
    everything else matches literally. The match is unanchored: ``"View"``
    accepts ``"MyViewController"``. Never raises: every other character is
    escaped before compilation.
    """
    parts: list[str] = []
    for char in query:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    regex = re.compile("".join(parts), re.IGNORECASE | re.DOTALL)

    def predicate(title: str) -> bool:
        return regex.search(title) is not None

    return predicate


def matches_reference(
    reference: Reference,
    predicate: Callable[[str], bool],
    filters: SearchFilters,
) -> bool:
    """Return True if the reference passes the title pattern and all active filters."""
    if not reference.title:
        return False

    if not predicate(reference.title):
        return False

    if filters.symbol_type and reference.kind != filters.symbol_type:
        return False

    if filters.platform:
        wanted = filters.platform.lower()
        # Only the reference's own availability counts; no data means no match
        if not any(wanted in platform.name.lower() for platform in reference.platforms or ()):
            return False

    return True


def strip_wildcards(query: str) -> str:
    return query.translate({ord(char): None for char in WILDCARD_CHARS})


def score_match(title: str, query: str) -> int:
    """Score how well ``title`` matches ``query``. Lower is better.

    0: exact (case-insensitive) match against the query without wildcards
    1: title starts with it
    2: title contains it
    3: matched only through the wildcard pattern

    A query made only of wildcards has nothing literal to compare, so every
    title scores 3.
    """
    literal = strip_wildcards(query).lower()
    if not literal:
        return SCORE_PATTERN

    lowered = title.lower()
    if lowered == literal:
        return SCORE_EXACT
    if lowered.startswith(literal):
        return SCORE_PREFIX
    if literal in lowered:
        return SCORE_CONTAINS
    return SCORE_PATTERN


def rank(items: Iterable[_T], query: str, title: Callable[[_T], str]) -> list[_T]:
    """Sort items by ``score_match`` ascending, keeping input order within a score."""
    return sorted(items, key=lambda item: score_match(title(item), query))
