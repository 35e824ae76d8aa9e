"""
Consumer-facing entry point.

A ``Session`` bundles one user's preferences and favorites with the
shared catalog, and is what the UI layer talks to. ``SessionRegistry``
hands out isolated sessions per user id.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from .catalog.models import Category, Venue
from .catalog.store import CatalogStore
from .config import DEFAULT_SETTINGS, Settings
from .events import EventChannel
from .favorites.manager import FAVORITES_KEY, FavoritesManager
from .preferences.manager import PROFILE_KEY, ProfileManager
from .preferences.models import PreferenceProfile
from .recommendations.cache import RecommendationCache
from .recommendations.models import ScoredVenue
from .recommendations.scoring import recommend_scored
from .search.engine import search
from .storage import JsonFileStore, KeyValueStore, MemoryStore, NamespacedStore

logger = logging.getLogger(__name__)


class Session:
    def __init__(
        self,
        catalog: CatalogStore,
        store: KeyValueStore,
        *,
        user_id: str = "default",
        cache: RecommendationCache | None = None,
        events: EventChannel | None = None,
        recommendation_limit: int = DEFAULT_SETTINGS.recommendation_limit,
    ) -> None:
        self.user_id = user_id
        self.catalog = catalog
        self.profiles = ProfileManager(store)
        self.favorites = FavoritesManager(store)
        self.cache = cache
        self.events = events or EventChannel()
        self.recommendation_limit = recommendation_limit
        self._lock = threading.RLock()
        self.profiles.load()
        self.favorites.load()

    # -- catalog views ----------------------------------------------------

    def get_catalog(self) -> tuple[Venue, ...]:
        return self.catalog.load()

    def get_venue(self, venue_id: str) -> Venue:
        return self.catalog.get(venue_id)

    def recommend_scored(self, limit: int | None = None) -> list[ScoredVenue]:
        snapshot = self.catalog.snapshot()
        profile = self.profiles.get()
        ranked = self.cache.get(snapshot.version, profile) if self.cache else None
        if ranked is None:
            ranked = tuple(recommend_scored(snapshot.venues, profile))
            if self.cache:
                self.cache.set(snapshot.version, profile, ranked)
        return list(ranked if limit is None else ranked[:limit])

    def recommend(self, limit: int | None = None) -> list[Venue]:
        """Full ranking for this user's profile, or its first ``limit`` venues."""
        return [item.venue for item in self.recommend_scored(limit)]

    def for_you(self) -> list[Venue]:
        return self.recommend(self.recommendation_limit)

    def search(self, query: str = "", category: Category | None = None) -> list[Venue]:
        return search(self.catalog.load(), query, category)

    # -- favorites --------------------------------------------------------

    def toggle_favorite(self, venue_id: str) -> bool:
        with self._lock:
            now_favorite = self.favorites.toggle(venue_id)
            self.events.publish(
                "favorite_toggled",
                user_id=self.user_id,
                venue_id=venue_id,
                is_favorite=now_favorite,
            )
            if self.favorites.dirty:
                self.events.publish("persistence_failed", user_id=self.user_id, key=FAVORITES_KEY)
            return now_favorite

    def is_favorite(self, venue_id: str) -> bool:
        return self.favorites.is_favorite(venue_id)

    def list_favorites(self) -> list[Venue]:
        return self.favorites.list(self.catalog.load())

    # -- preferences ------------------------------------------------------

    def get_profile(self) -> PreferenceProfile:
        return self.profiles.get()

    def update_profile(
        self,
        mutator: Optional[Callable[[PreferenceProfile], Optional[PreferenceProfile]]] = None,
        **fields: Any,
    ) -> PreferenceProfile:
        """
        Change the profile with a mutator, keyword fields, or both.

        The mutator runs first; keyword fields are then assigned on its
        result, e.g. ``update_profile(favorite_cuisines={"Thai"})``.
        """
        unknown = sorted(set(fields) - set(PreferenceProfile.model_fields))
        if unknown:
            raise TypeError(f"Unknown profile field(s): {', '.join(unknown)}")

        def apply(profile: PreferenceProfile) -> PreferenceProfile:
            result = mutator(profile) if mutator is not None else None
            target = profile if result is None else result
            for name, value in fields.items():
                setattr(target, name, value)
            return target

        with self._lock:
            profile = self.profiles.update(apply)
            self.events.publish(
                "profile_updated",
                user_id=self.user_id,
                profile=profile.model_dump(mode="json"),
            )
            if self.profiles.dirty:
                self.events.publish("persistence_failed", user_id=self.user_id, key=PROFILE_KEY)
            return profile


class SessionRegistry:
    """One Session per user id over a shared catalog, cache and storage backend."""

    def __init__(
        self,
        catalog: CatalogStore | None = None,
        backend: KeyValueStore | None = None,
        settings: Settings = DEFAULT_SETTINGS,
    ) -> None:
        self.settings = settings
        self.catalog = catalog or CatalogStore(settings.catalog_path)
        if backend is None:
            backend = JsonFileStore(settings.state_path) if settings.state_path else MemoryStore()
        self.backend = backend
        self.cache = RecommendationCache(ttl=settings.cache_ttl)
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> Session:
        if not user_id:
            raise ValueError("user_id must be a non-empty string")
        with self._lock:
            session = self._sessions.get(user_id)
            if session is None:
                session = Session(
                    self.catalog,
                    NamespacedStore(self.backend, user_id),
                    user_id=user_id,
                    cache=self.cache,
                    recommendation_limit=self.settings.recommendation_limit,
                )
                self._sessions[user_id] = session
                logger.debug("Opened session for %s", user_id)
            return session

    def close(self, user_id: str) -> None:
        with self._lock:
            self._sessions.pop(user_id, None)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
