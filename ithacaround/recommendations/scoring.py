from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..catalog.models import Venue
from ..preferences.models import PreferenceProfile
from .models import ScoreBreakdown, ScoredVenue

MAX_RATING = 5.0


@dataclass(frozen=True)
class ScoringWeights:
    cuisine: float = 0.40
    price: float = 0.25
    atmosphere: float = 0.20
    features: float = 0.15
    rating: float = 0.10

    @property
    def ceiling(self) -> float:
        return self.cuisine + self.price + self.atmosphere + self.features + self.rating


DEFAULT_WEIGHTS = ScoringWeights()


def _overlaps(venue_tags: Iterable, wanted: set) -> bool:
    return any(tag in wanted for tag in venue_tags)


def score_breakdown(
    venue: Venue,
    profile: PreferenceProfile,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> ScoreBreakdown:
    """Per-signal contributions for one venue. Each signal is independent of the others."""
    return ScoreBreakdown(
        cuisine=weights.cuisine if _overlaps(venue.cuisine_types, profile.favorite_cuisines) else 0.0,
        price=weights.price if venue.price_range in profile.preferred_price_ranges else 0.0,
        atmosphere=weights.atmosphere if _overlaps(venue.atmosphere, profile.preferred_atmospheres) else 0.0,
        features=weights.features if _overlaps(venue.features, profile.important_features) else 0.0,
        rating=(venue.rating / MAX_RATING) * weights.rating,
    )


def score_venue(
    venue: Venue,
    profile: PreferenceProfile,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """Weighted preference match plus a rating boost, in [0, weights.ceiling]."""
    return score_breakdown(venue, profile, weights).total


def recommend_scored(
    catalog: Iterable[Venue],
    profile: PreferenceProfile,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[ScoredVenue]:
    scored: list[ScoredVenue] = []
    for venue in catalog:
        breakdown = score_breakdown(venue, profile, weights)
        scored.append(ScoredVenue(venue=venue, score=breakdown.total, breakdown=breakdown))
    # sorted() is stable, so equal scores keep catalog order.
    return sorted(scored, key=lambda item: item.score, reverse=True)


def recommend(
    catalog: Iterable[Venue],
    profile: PreferenceProfile,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[Venue]:
    """
    Rank the whole catalog for ``profile``, best match first.

    Dietary restrictions and max distance are not applied. The full
    ranking is returned; callers take whatever prefix they display.
    """
    return [item.venue for item in recommend_scored(catalog, profile, weights)]
