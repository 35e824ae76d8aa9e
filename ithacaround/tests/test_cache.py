from __future__ import annotations

from unittest.mock import patch

from ithacaround.catalog.models import Cuisine
from ithacaround.preferences.models import PreferenceProfile
from ithacaround.recommendations.cache import RecommendationCache, make_key


def test_cache_miss_then_hit():
    cache = RecommendationCache(ttl=60)
    profile = PreferenceProfile()
    assert cache.get(1, profile) is None
    cache.set(1, profile, ("ranked",))
    assert cache.get(1, profile) == ("ranked",)
    stats = cache.stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 50.0


def test_new_catalog_version_misses():
    cache = RecommendationCache(ttl=60)
    profile = PreferenceProfile()
    cache.set(1, profile, "v1")
    assert cache.get(2, profile) is None


def test_profile_change_misses():
    cache = RecommendationCache(ttl=60)
    cache.set(1, PreferenceProfile(), "default")
    assert cache.get(1, PreferenceProfile(favorite_cuisines={Cuisine.thai})) is None


def test_key_ignores_set_iteration_order():
    a = PreferenceProfile(favorite_cuisines={Cuisine.thai, Cuisine.indian, Cuisine.pizza})
    b = PreferenceProfile(favorite_cuisines={Cuisine.pizza, Cuisine.thai, Cuisine.indian})
    assert make_key(3, a) == make_key(3, b)


def test_expired_entries_are_dropped():
    cache = RecommendationCache(ttl=10)
    profile = PreferenceProfile()
    with patch("ithacaround.recommendations.cache.time.time", return_value=1000.0):
        cache.set(1, profile, "old")
    with patch("ithacaround.recommendations.cache.time.time", return_value=1011.0):
        assert cache.get(1, profile) is None
    assert cache.stats()["size"] == 0


def test_clear_resets_stats():
    cache = RecommendationCache(ttl=60)
    cache.set(1, PreferenceProfile(), "x")
    cache.get(1, PreferenceProfile())
    cache.clear()
    assert cache.stats() == {"size": 0, "hits": 0, "misses": 0, "hit_rate": 0.0}


def test_set_sweeps_expired_entries_for_other_keys():
    cache = RecommendationCache(ttl=10)
    with patch("ithacaround.recommendations.cache.time.time", return_value=1000.0):
        cache.set(1, PreferenceProfile(), "old")
    with patch("ithacaround.recommendations.cache.time.time", return_value=1011.0):
        cache.set(2, PreferenceProfile(favorite_cuisines={Cuisine.thai}), "new")
        assert cache.get(2, PreferenceProfile(favorite_cuisines={Cuisine.thai})) == "new"
    assert cache.stats()["size"] == 1
