from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, List

import pandas as pd
from pydantic import ValidationError

from ..errors import CatalogLoadError
from .models import Venue

logger = logging.getLogger(__name__)

CATALOG_COLUMNS: List[str] = [
    "id",
    "name",
    "category",
    "cuisine_types",
    "price_range",
    "atmosphere",
    "features",
    "latitude",
    "longitude",
    "hours",
    "description",
    "address",
    "rating",
    "review_count",
    "image_ref",
]

REQUIRED_COLUMNS: List[str] = [
    "name",
    "category",
    "price_range",
    "latitude",
    "longitude",
    "rating",
]

_LIST_COLUMNS = ("cuisine_types", "atmosphere", "features")


def _split_labels(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _row_to_record(row: pd.Series) -> dict[str, Any]:
    """Map one CSV row (all cells as strings) onto Venue's field layout."""
    record: dict[str, Any] = {}
    for col in CATALOG_COLUMNS:
        if col not in row.index:
            continue
        value = str(row[col]).strip()
        if col in _LIST_COLUMNS:
            record[col] = _split_labels(value)
        elif col in ("latitude", "longitude"):
            record.setdefault("coordinate", {})[col] = value
        elif col in ("id", "image_ref", "review_count"):
            # Blank means "not given": let the model apply its default.
            if value:
                record[col] = value
        else:
            record[col] = value
    return record


def _describe(error: ValidationError) -> tuple[str, str]:
    first = error.errors()[0]
    loc = first.get("loc") or ("?",)
    field = ".".join(str(part) for part in loc)
    detail = first.get("msg", "invalid value")
    if len(loc) > 1 and first.get("input") is not None:
        detail = f"{detail} (got {first['input']!r})"
    return field, detail


def load_venues(records: Iterable[Venue | dict[str, Any]]) -> tuple[Venue, ...]:
    """
    Validate a batch of venues.

    Every entry must validate and every id must be unique; the first
    problem raises CatalogLoadError and no venue from the batch is returned.
    """
    venues: list[Venue] = []
    seen: dict[str, int] = {}
    for position, record in enumerate(records, start=1):
        if isinstance(record, Venue):
            venue = record
        else:
            name = record.get("name") if isinstance(record, dict) else None
            try:
                venue = Venue.model_validate(record)
            except ValidationError as exc:
                field, detail = _describe(exc)
                raise CatalogLoadError(
                    f"Catalog entry {position} ({name or 'unnamed'}): invalid {field}: {detail}",
                    row=position,
                    field=field,
                    venue_name=name,
                ) from exc

        if venue.id in seen:
            raise CatalogLoadError(
                f"Catalog entry {position} ({venue.name}): duplicate id {venue.id!r} "
                f"(first used by entry {seen[venue.id]})",
                row=position,
                field="id",
                venue_name=venue.name,
            )
        seen[venue.id] = position
        venues.append(venue)
    return tuple(venues)


def load_catalog(path: Path | str) -> tuple[Venue, ...]:
    """Read a catalog CSV. List columns hold comma-separated display labels."""
    path = Path(path)
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise CatalogLoadError(f"Could not read catalog {path}: {exc}") from exc

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise CatalogLoadError(
            f"Catalog {path} is missing required column(s): {', '.join(missing)}",
            field=missing[0],
        )

    venues = load_venues(_row_to_record(row) for _, row in df.iterrows())
    logger.info("Loaded %d venues from %s", len(venues), path)
    return venues
