from __future__ import annotations


class IthacaroundError(Exception):
    """Base class for every error raised by the engine."""


class CatalogLoadError(IthacaroundError, ValueError):
    """A catalog entry failed validation; nothing from the batch is admitted."""

    def __init__(
        self,
        message: str,
        *,
        row: int | None = None,
        field: str | None = None,
        venue_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.row = row
        self.field = field
        self.venue_name = venue_name


class VenueNotFound(IthacaroundError, KeyError):
    def __init__(self, venue_id: str) -> None:
        super().__init__(venue_id)
        self.venue_id = venue_id

    def __str__(self) -> str:
        return f"No venue with id {self.venue_id!r} in the catalog"


class StorageError(IthacaroundError, OSError):
    """Raised by a key-value store when a write cannot be completed."""
