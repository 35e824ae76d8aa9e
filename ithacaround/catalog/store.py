from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ..config import DEFAULT_SETTINGS
from ..errors import VenueNotFound
from .loader import load_catalog, load_venues
from .models import Venue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    """One consistent catalog view. Readers keep a reference; reloads never touch it."""

    version: int
    venues: tuple[Venue, ...]
    by_id: Mapping[str, Venue] = field(repr=False)

    @classmethod
    def build(cls, version: int, venues: tuple[Venue, ...]) -> "CatalogSnapshot":
        return cls(
            version=version,
            venues=venues,
            by_id=MappingProxyType({v.id: v for v in venues}),
        )

    def __len__(self) -> int:
        return len(self.venues)


class CatalogStore:
    """Holds the session catalog. Loaded once, replaced only as a whole."""

    def __init__(
        self,
        path: Path | str | None = None,
        venues: Iterable[Venue | dict[str, Any]] | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else DEFAULT_SETTINGS.catalog_path
        self._lock = threading.Lock()
        self._snapshot: CatalogSnapshot | None = None
        if venues is not None:
            self._snapshot = CatalogSnapshot.build(1, load_venues(venues))

    def snapshot(self) -> CatalogSnapshot:
        snap = self._snapshot
        if snap is not None:
            return snap
        with self._lock:
            if self._snapshot is None:
                self._snapshot = CatalogSnapshot.build(1, load_catalog(self.path))
            return self._snapshot

    def load(self) -> tuple[Venue, ...]:
        """Return the session's venues, reading the catalog file on first call only."""
        return self.snapshot().venues

    def get(self, venue_id: str) -> Venue:
        venue = self.snapshot().by_id.get(venue_id)
        if venue is None:
            raise VenueNotFound(venue_id)
        return venue

    @property
    def version(self) -> int:
        return self.snapshot().version

    def replace(self, venues: Iterable[Venue | dict[str, Any]]) -> CatalogSnapshot:
        """Validate a whole new catalog, then swap it in. On error the old snapshot stays."""
        validated = load_venues(venues)
        with self._lock:
            current = self._snapshot.version if self._snapshot is not None else 0
            self._snapshot = CatalogSnapshot.build(current + 1, validated)
            logger.info(
                "Catalog replaced: version %d, %d venues",
                self._snapshot.version,
                len(validated),
            )
            return self._snapshot

    def reload(self) -> CatalogSnapshot:
        return self.replace(load_catalog(self.path))
