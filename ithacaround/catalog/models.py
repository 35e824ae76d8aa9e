from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    restaurant = "Restaurant"
    cafe = "Cafe"
    bar = "Bar"
    study_spot = "Study Spot"
    outdoor = "Outdoor"
    entertainment = "Entertainment"


class Cuisine(str, Enum):
    american = "American"
    italian = "Italian"
    asian = "Asian"
    mexican = "Mexican"
    indian = "Indian"
    mediterranean = "Mediterranean"
    vegetarian = "Vegetarian"
    vegan = "Vegan"
    pizza = "Pizza"
    coffee = "Coffee"
    dessert = "Dessert"
    thai = "Thai"
    chinese = "Chinese"
    japanese = "Japanese"


class PriceRange(str, Enum):
    budget = "$"
    moderate = "$$"
    expensive = "$$$"

    @property
    def band(self) -> str:
        """Display band shown next to the dollar signs."""
        return PRICE_BANDS[self]


PRICE_BANDS: dict[PriceRange, str] = {
    PriceRange.budget: "<$15",
    PriceRange.moderate: "$15-25",
    PriceRange.expensive: "$25+",
}


class Atmosphere(str, Enum):
    casual = "Casual"
    upscale = "Upscale"
    romantic = "Romantic"
    study_friendly = "Study Friendly"
    lively = "Lively"
    quiet = "Quiet"
    family_friendly = "Family Friendly"
    nature = "Nature"


class Feature(str, Enum):
    wifi = "WiFi"
    outdoor_seating = "Outdoor Seating"
    late_night = "Late Night"
    delivery = "Delivery"
    parking = "Parking"
    wheelchair_accessible = "Wheelchair Accessible"
    group_friendly = "Group Friendly"
    date_spot = "Date Spot"


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


def _new_venue_id() -> str:
    return uuid.uuid4().hex


class Venue(BaseModel):
    """A single discoverable place. Tag collections keep their listed order, without repeats."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=_new_venue_id, min_length=1)
    name: str = Field(..., min_length=1)
    category: Category
    cuisine_types: tuple[Cuisine, ...] = ()
    price_range: PriceRange
    atmosphere: tuple[Atmosphere, ...] = ()
    features: tuple[Feature, ...] = ()
    coordinate: Coordinate
    hours: str = ""
    description: str = ""
    address: str = ""
    rating: float = Field(..., ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    image_ref: str | None = None

    @field_validator("cuisine_types", "atmosphere", "features")
    @classmethod
    def dedupe_tags(cls, value: tuple) -> tuple:
        return tuple(dict.fromkeys(value))
