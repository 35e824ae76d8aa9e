from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, Optional

from pydantic import ValidationError

from ..catalog.models import Atmosphere, Cuisine, Feature, PriceRange
from ..errors import StorageError
from ..storage import KeyValueStore
from .models import PreferenceProfile

logger = logging.getLogger(__name__)

PROFILE_KEY = "userPreferences"

ProfileMutator = Callable[[PreferenceProfile], Optional[PreferenceProfile]]


class ProfileManager:
    """
    Owns one user's PreferenceProfile.

    Every change goes through ``update`` so the in-memory profile and the
    persisted blob move together. Callers only ever receive copies.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self._lock = threading.RLock()
        self._profile: PreferenceProfile | None = None
        self.dirty = False  # True while the last write failed

    def _decode(self, raw: str | None) -> PreferenceProfile:
        if raw is None:
            return PreferenceProfile()
        try:
            return PreferenceProfile.model_validate_json(raw)
        except ValidationError:
            logger.warning(
                "Stored preferences under %r could not be decoded, using defaults",
                PROFILE_KEY,
                exc_info=True,
            )
            return PreferenceProfile()

    def _persist(self, profile: PreferenceProfile) -> bool:
        try:
            self.store.set(PROFILE_KEY, profile.model_dump_json())
        except (StorageError, OSError):
            logger.warning("Failed to persist preferences, keeping in-memory copy", exc_info=True)
            self.dirty = True
            return False
        self.dirty = False
        return True

    def _current(self) -> PreferenceProfile:
        if self._profile is None:
            self.load()
        return self._profile

    def load(self) -> PreferenceProfile:
        """Read the persisted profile, or defaults when absent or unreadable."""
        with self._lock:
            try:
                raw = self.store.get(PROFILE_KEY)
            except (StorageError, OSError):
                logger.warning("Failed to read preferences, using defaults", exc_info=True)
                raw = None
            self._profile = self._decode(raw)
            return self._profile.model_copy(deep=True)

    def get(self) -> PreferenceProfile:
        with self._lock:
            return self._current().model_copy(deep=True)

    def update(self, mutator: ProfileMutator) -> PreferenceProfile:
        """
        Apply ``mutator`` to a copy of the profile, then install and persist it.

        The mutator may edit the copy in place or return a replacement.
        If it raises, or its result fails validation, nothing changes.
        """
        with self._lock:
            draft = self._current().model_copy(deep=True)
            result = mutator(draft)
            candidate = draft if result is None else result
            if not isinstance(candidate, PreferenceProfile):
                raise TypeError(
                    f"Profile mutator must return a PreferenceProfile or None, got {type(candidate).__name__}"
                )
            # In-place set edits bypass assignment validation; re-check everything.
            validated = PreferenceProfile.model_validate(candidate.model_dump())
            self._profile = validated
            self._persist(validated)
            return validated.model_copy(deep=True)

    def save(self) -> bool:
        with self._lock:
            return self._persist(self._current())

    # -- explicit setters -------------------------------------------------

    def set_favorite_cuisines(self, cuisines: Iterable[Cuisine | str]) -> PreferenceProfile:
        values = set(cuisines)
        return self.update(lambda p: setattr(p, "favorite_cuisines", values))

    def set_preferred_price_ranges(self, prices: Iterable[PriceRange | str]) -> PreferenceProfile:
        values = set(prices)
        return self.update(lambda p: setattr(p, "preferred_price_ranges", values))

    def set_preferred_atmospheres(self, atmospheres: Iterable[Atmosphere | str]) -> PreferenceProfile:
        values = set(atmospheres)
        return self.update(lambda p: setattr(p, "preferred_atmospheres", values))

    def set_important_features(self, features: Iterable[Feature | str]) -> PreferenceProfile:
        values = set(features)
        return self.update(lambda p: setattr(p, "important_features", values))

    def set_dietary_restrictions(self, cuisines: Iterable[Cuisine | str]) -> PreferenceProfile:
        values = set(cuisines)
        return self.update(lambda p: setattr(p, "dietary_restrictions", values))

    def set_max_distance(self, miles: float) -> PreferenceProfile:
        return self.update(lambda p: setattr(p, "max_distance", miles))

    def reset(self) -> PreferenceProfile:
        return self.update(lambda _: PreferenceProfile())
