"""
Display lookups for the UI layer. The engine itself never imports this module.
"""
from __future__ import annotations

from dataclasses import dataclass

from .catalog.models import Category, Venue

CATEGORY_ICONS: dict[Category, str] = {
    Category.restaurant: "fork.knife",
    Category.cafe: "cup.and.saucer",
    Category.bar: "wineglass",
    Category.study_spot: "book",
    Category.outdoor: "leaf",
    Category.entertainment: "theatermasks",
}


@dataclass(frozen=True)
class MapRegion:
    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float


# Collegetown, Ithaca
DEFAULT_MAP_REGION = MapRegion(
    latitude=42.4440,
    longitude=-76.4830,
    latitude_delta=0.1,
    longitude_delta=0.1,
)


def icon_for(category: Category) -> str:
    return CATEGORY_ICONS[category]


def card_subtitle(venue: Venue, max_cuisines: int = 2) -> str:
    cuisines = ", ".join(c.value for c in venue.cuisine_types[:max_cuisines])
    if not cuisines:
        return venue.category.value
    return f"{venue.category.value} • {cuisines}"


def rating_label(venue: Venue) -> str:
    return f"{venue.rating:.1f} ({venue.review_count} reviews)"


def price_label(venue: Venue) -> str:
    return f"{venue.price_range.value} · {venue.price_range.band}"
