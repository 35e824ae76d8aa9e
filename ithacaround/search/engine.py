from __future__ import annotations

import unicodedata
from typing import Iterable

from ..catalog.models import Category, Venue


def fold(text: str) -> str:
    """Normalize for caseless comparison (NFKC, then casefold)."""
    return unicodedata.normalize("NFKC", text).casefold()


def filter_by_category(catalog: Iterable[Venue], category: Category | None) -> list[Venue]:
    if category is None:
        return list(catalog)
    return [venue for venue in catalog if venue.category == category]


def matches_query(venue: Venue, query: str) -> bool:
    """True when the query is a substring of the name, description or a cuisine label."""
    if not query.strip():
        return True
    # Surrounding whitespace is significant: "Bagels " only matches where a space follows.
    needle = fold(query)
    if needle in fold(venue.name) or needle in fold(venue.description):
        return True
    return any(needle in fold(cuisine.value) for cuisine in venue.cuisine_types)


def search(
    catalog: Iterable[Venue],
    query: str = "",
    category: Category | None = None,
) -> list[Venue]:
    """
    Filter the catalog, keeping its order.

    Category and text filters both apply when given. An empty query
    leaves the category result untouched.
    """
    candidates = filter_by_category(catalog, category)
    if not query or not query.strip():
        return candidates
    return [venue for venue in candidates if matches_query(venue, query)]
