from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..catalog.models import Venue


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    cuisine: float = 0.0
    price: float = 0.0
    atmosphere: float = 0.0
    features: float = 0.0
    rating: float = 0.0

    @property
    def total(self) -> float:
        return self.cuisine + self.price + self.atmosphere + self.features + self.rating

    def matched(self) -> list[str]:
        """Names of the preference signals that fired (the rating boost always does)."""
        signals = ("cuisine", "price", "atmosphere", "features")
        return [name for name in signals if getattr(self, name) > 0]


class ScoredVenue(BaseModel):
    model_config = ConfigDict(frozen=True)

    venue: Venue
    score: float = Field(..., ge=0.0)
    breakdown: ScoreBreakdown
