from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_PACKAGE_DIR = Path(__file__).resolve().parent
BUNDLED_CATALOG = _PACKAGE_DIR / "data" / "venues.csv"


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name, "").strip()
    return Path(raw).expanduser() if raw else None


@dataclass(frozen=True)
class Settings:
    catalog_path: Path = _env_path("ITHACAROUND_CATALOG_PATH") or BUNDLED_CATALOG
    state_path: Path | None = _env_path("ITHACAROUND_STATE_PATH")
    recommendation_limit: int = int(os.getenv("ITHACAROUND_RECOMMENDATION_LIMIT") or "10")
    cache_ttl: float = float(os.getenv("ITHACAROUND_CACHE_TTL") or "300")
    log_level: str = os.getenv("ITHACAROUND_LOG_LEVEL") or "WARNING"


DEFAULT_SETTINGS = Settings()


def configure_logging(settings: Settings = DEFAULT_SETTINGS) -> None:
    """Apply the configured level to the package logger. Handlers are left to the host app."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.getLogger("ithacaround").setLevel(level)
