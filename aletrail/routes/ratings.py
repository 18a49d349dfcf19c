from __future__ import annotations

from fastapi import APIRouter, Depends

from ..data import get_store
from ..data.store import TrailStore
from ..ratings.models import BreweryRatingsResponse, RatingResponse, RatingSubmission
from ..ratings.service import brewery_rating_summary, list_user_ratings, submit_rating

router = APIRouter(prefix="/api/ratings", tags=["ratings"])


@router.post("", response_model=RatingResponse)
def post_rating(body: RatingSubmission, store: TrailStore = Depends(get_store)) -> RatingResponse:
    return RatingResponse(rating=submit_rating(store, body))


@router.get("/user/{user_id}")
def user_ratings(user_id: str, store: TrailStore = Depends(get_store)) -> dict:
    return {"success": True, "ratings": list_user_ratings(store, user_id)}


@router.get("/brewery/{brewery_id}", response_model=BreweryRatingsResponse)
def brewery_ratings(brewery_id: str, store: TrailStore = Depends(get_store)) -> BreweryRatingsResponse:
    ratings, stats = brewery_rating_summary(store, brewery_id)
    return BreweryRatingsResponse(ratings=ratings, stats=stats)
