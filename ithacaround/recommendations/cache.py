from __future__ import annotations

import hashlib
import logging
import threading
import time
from typing import Any

from ..config import DEFAULT_SETTINGS
from ..preferences.models import PreferenceProfile

logger = logging.getLogger(__name__)


def make_key(catalog_version: int, profile: PreferenceProfile) -> str:
    normalized = f"{catalog_version}:{profile.model_dump_json()}"
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


class RecommendationCache:
    """
    TTL cache for rankings keyed by catalog version and serialized profile.

    A catalog swap bumps the version, so stale rankings are never
    returned; they simply age out.
    """

    def __init__(self, ttl: float = DEFAULT_SETTINGS.cache_ttl) -> None:
        self.ttl = ttl
        self._entries: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, catalog_version: int, profile: PreferenceProfile) -> Any | None:
        key = make_key(catalog_version, profile)
        with self._lock:
            entry = self._entries.get(key)
            if entry and time.time() - entry["created_at"] < self.ttl:
                self._hits += 1
                logger.debug("Ranking cache hit %s (catalog v%d)", key, catalog_version)
                return entry["value"]
            if entry:
                del self._entries[key]
            self._misses += 1
            logger.debug("Ranking cache miss %s (catalog v%d)", key, catalog_version)
            return None

    def set(self, catalog_version: int, profile: PreferenceProfile, value: Any) -> None:
        key = make_key(catalog_version, profile)
        now = time.time()
        with self._lock:
            expired = [k for k, e in self._entries.items() if now - e["created_at"] >= self.ttl]
            for stale in expired:
                del self._entries[stale]
            self._entries[key] = {"value": value, "created_at": now}

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
