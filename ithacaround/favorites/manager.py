from __future__ import annotations

import json
import logging
import threading
from typing import Iterable

from pydantic import TypeAdapter, ValidationError

from ..catalog.models import Venue
from ..errors import StorageError
from ..storage import KeyValueStore

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favoriteLocations"

_IDS = TypeAdapter(frozenset[str])


class FavoritesManager:
    """
    Set of favorited venue ids, persisted on every toggle.

    Ids are not checked against the catalog: toggling an id the catalog
    does not contain is accepted, and ``list`` simply never yields it.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self._lock = threading.RLock()
        self._ids: frozenset[str] | None = None
        self.dirty = False

    def load(self) -> frozenset[str]:
        with self._lock:
            try:
                raw = self.store.get(FAVORITES_KEY)
            except (StorageError, OSError):
                logger.warning("Failed to read favorites, starting empty", exc_info=True)
                raw = None
            ids: frozenset[str] = frozenset()
            if raw is not None:
                try:
                    ids = _IDS.validate_json(raw)
                except ValidationError:
                    logger.warning(
                        "Stored favorites under %r could not be decoded, starting empty",
                        FAVORITES_KEY,
                        exc_info=True,
                    )
            self._ids = ids
            return ids

    def _current(self) -> frozenset[str]:
        if self._ids is None:
            self.load()
        return self._ids

    def _persist(self, ids: frozenset[str]) -> bool:
        try:
            self.store.set(FAVORITES_KEY, json.dumps(sorted(ids)))
        except (StorageError, OSError):
            logger.warning("Failed to persist favorites, keeping in-memory copy", exc_info=True)
            self.dirty = True
            return False
        self.dirty = False
        return True

    def ids(self) -> frozenset[str]:
        with self._lock:
            return self._current()

    def toggle(self, venue_id: str) -> bool:
        """Flip membership of ``venue_id``; returns whether it is now a favorite."""
        with self._lock:
            current = self._current()
            if venue_id in current:
                updated = current - {venue_id}
            else:
                updated = current | {venue_id}
            self._ids = updated
            self._persist(updated)
            return venue_id in updated

    def is_favorite(self, venue_id: str) -> bool:
        return venue_id in self.ids()

    def list(self, catalog: Iterable[Venue]) -> list[Venue]:
        """Favorited venues in catalog order."""
        ids = self.ids()
        return [venue for venue in catalog if venue.id in ids]

    def save(self) -> bool:
        with self._lock:
            return self._persist(self._current())
