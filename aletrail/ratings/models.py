from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MIN_RATING = 1
MAX_RATING = 5


class RatingSubmission(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    brewery_id: str = Field(..., alias="breweryId")
    beer_id: str | None = Field(default=None, alias="beerId")
    rating: int
    review: str | None = None
    flavors_enjoyed: list[str] | None = Field(default=None, alias="flavorsEnjoyed")


class RatingResponse(BaseModel):
    success: bool = True
    rating: dict[str, Any]
    message: str = "Rating submitted successfully!"


class RatingStats(BaseModel):
    averageRating: float
    totalRatings: int
    distribution: dict[int, int]


class BreweryRatingsResponse(BaseModel):
    success: bool = True
    ratings: list[dict[str, Any]]
    stats: RatingStats
