from __future__ import annotations

import pytest

from ithacaround.catalog.loader import load_venues
from ithacaround.catalog.models import Atmosphere, Cuisine, Feature, PriceRange
from ithacaround.preferences.models import PreferenceProfile
from ithacaround.recommendations.scoring import (
    DEFAULT_WEIGHTS,
    recommend,
    recommend_scored,
    score_breakdown,
    score_venue,
)

CATALOG = load_venues([
    {
        "id": "bagels",
        "name": "Collegetown Bagels",
        "category": "Cafe",
        "cuisine_types": ["American", "Coffee"],
        "price_range": "$",
        "atmosphere": ["Casual", "Study Friendly"],
        "features": ["WiFi", "Delivery"],
        "coordinate": {"latitude": 42.4440, "longitude": -76.4830},
        "rating": 4.3,
        "review_count": 1308,
    },
    {
        "id": "moosewood",
        "name": "Moosewood Restaurant",
        "category": "Restaurant",
        "cuisine_types": ["Vegetarian", "Vegan", "American"],
        "price_range": "$$",
        "atmosphere": ["Casual", "Family Friendly"],
        "features": ["Wheelchair Accessible", "Group Friendly"],
        "coordinate": {"latitude": 42.2629, "longitude": -76.2956},
        "rating": 4.4,
        "review_count": 189,
    },
])

BAGELS, MOOSEWOOD = CATALOG


def _venue(vid: str, rating: float, **overrides):
    record = {
        "id": vid,
        "name": vid.title(),
        "category": "Restaurant",
        "price_range": "$$$",
        "coordinate": {"latitude": 42.44, "longitude": -76.49},
        "rating": rating,
    }
    record.update(overrides)
    return load_venues([record])[0]


def test_documented_scenario_scores_and_order():
    profile = PreferenceProfile(
        favorite_cuisines={Cuisine.american},
        preferred_price_ranges={PriceRange.budget},
    )
    assert score_venue(BAGELS, profile) == pytest.approx(0.736)
    assert score_venue(MOOSEWOOD, profile) == pytest.approx(0.488)
    assert recommend(CATALOG, profile) == [BAGELS, MOOSEWOOD]


def test_breakdown_lists_each_signal():
    profile = PreferenceProfile(
        favorite_cuisines={Cuisine.coffee},
        preferred_price_ranges={PriceRange.moderate},
        preferred_atmospheres={Atmosphere.study_friendly},
        important_features={Feature.wifi},
    )
    breakdown = score_breakdown(BAGELS, profile)
    assert breakdown.cuisine == pytest.approx(0.40)
    assert breakdown.price == 0.0
    assert breakdown.atmosphere == pytest.approx(0.20)
    assert breakdown.features == pytest.approx(0.15)
    assert breakdown.rating == pytest.approx(0.086)
    assert breakdown.matched() == ["cuisine", "atmosphere", "features"]
    assert breakdown.total == pytest.approx(0.836)


def test_score_within_bounds():
    everything = PreferenceProfile(
        favorite_cuisines=set(Cuisine),
        preferred_price_ranges=set(PriceRange),
        preferred_atmospheres=set(Atmosphere),
        important_features=set(Feature),
    )
    perfect = _venue(
        "perfect", 5.0,
        cuisine_types=["Thai"], atmosphere=["Quiet"], features=["Parking"],
    )
    assert score_venue(perfect, everything) == pytest.approx(DEFAULT_WEIGHTS.ceiling)
    assert DEFAULT_WEIGHTS.ceiling == pytest.approx(1.1)
    for venue in CATALOG:
        assert 0.0 <= score_venue(venue, everything) <= 1.1
        assert 0.0 <= score_venue(venue, PreferenceProfile.empty()) <= 1.1


def test_score_increases_with_rating():
    profile = PreferenceProfile()
    scores = [score_venue(_venue("v", r), profile) for r in (0.0, 1.0, 2.5, 4.0, 5.0)]
    assert scores == sorted(scores)
    assert scores[0] == 0.0


def test_dietary_restrictions_and_distance_do_not_filter():
    profile = PreferenceProfile(
        favorite_cuisines={Cuisine.vegetarian},
        dietary_restrictions={Cuisine.vegetarian, Cuisine.american},
        max_distance=0.0,
    )
    ranked = recommend(CATALOG, profile)
    assert len(ranked) == len(CATALOG)
    assert ranked[0] is MOOSEWOOD


def test_empty_profile_ranks_by_rating():
    catalog = [_venue("low", 3.1), _venue("high", 4.9), _venue("mid", 4.0)]
    ranked = recommend(catalog, PreferenceProfile.empty())
    assert [v.id for v in ranked] == ["high", "mid", "low"]


def test_ties_keep_catalog_order():
    catalog = [_venue(name, 4.0) for name in ("a", "b", "c", "d")]
    ranked = recommend(catalog, PreferenceProfile.empty())
    assert [v.id for v in ranked] == ["a", "b", "c", "d"]

    reversed_catalog = list(reversed(catalog))
    assert [v.id for v in recommend(reversed_catalog, PreferenceProfile.empty())] == ["d", "c", "b", "a"]


def test_ranking_is_descending_and_complete():
    profile = PreferenceProfile(favorite_cuisines={Cuisine.vegan})
    scored = recommend_scored(CATALOG, profile)
    scores = [item.score for item in scored]
    assert scores == sorted(scores, reverse=True)
    assert {item.venue.id for item in scored} == {"bagels", "moosewood"}


def test_empty_catalog_gives_empty_ranking():
    assert recommend([], PreferenceProfile()) == []


def test_recommend_is_deterministic():
    profile = PreferenceProfile(preferred_atmospheres={Atmosphere.casual})
    assert recommend(CATALOG, profile) == recommend(CATALOG, profile)
