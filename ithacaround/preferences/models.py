from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..catalog.models import Atmosphere, Cuisine, Feature, PriceRange

DEFAULT_PRICE_RANGES = frozenset({PriceRange.budget, PriceRange.moderate})
DEFAULT_MAX_DISTANCE = 5.0  # miles


def _declaration_order(member: Enum) -> int:
    return list(type(member)).index(member)


class PreferenceProfile(BaseModel):
    """
    A user's saved ranking preferences.

    ``dietary_restrictions`` and ``max_distance`` are stored and persisted
    but scoring does not apply them.
    """

    model_config = ConfigDict(validate_assignment=True)

    favorite_cuisines: set[Cuisine] = Field(default_factory=set)
    preferred_price_ranges: set[PriceRange] = Field(
        default_factory=lambda: set(DEFAULT_PRICE_RANGES)
    )
    preferred_atmospheres: set[Atmosphere] = Field(default_factory=set)
    important_features: set[Feature] = Field(default_factory=set)
    dietary_restrictions: set[Cuisine] = Field(default_factory=set)
    max_distance: float = Field(default=DEFAULT_MAX_DISTANCE, ge=0.0)

    @field_serializer(
        "favorite_cuisines",
        "preferred_price_ranges",
        "preferred_atmospheres",
        "important_features",
        "dietary_restrictions",
        when_used="json",
    )
    def labels_in_order(self, members: set[Enum]) -> list[str]:
        return [m.value for m in sorted(members, key=_declaration_order)]

    @classmethod
    def empty(cls) -> "PreferenceProfile":
        """A profile with every set cleared, including the default price ranges."""
        return cls(preferred_price_ranges=set())
