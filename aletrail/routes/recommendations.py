from __future__ import annotations

from fastapi import APIRouter, Depends

from ..data import get_store
from ..data.store import TrailStore
from ..errors import InvalidInput
from ..recommendations.engine import get_user_recommendations
from ..recommendations.models import RecommendationResponse

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


@router.get("/{user_id}", response_model=RecommendationResponse)
def recommendations(
    user_id: str,
    trail: str | None = None,
    store: TrailStore = Depends(get_store),
) -> RecommendationResponse:
    if not trail:
        raise InvalidInput("Trail subdomain required")
    return get_user_recommendations(store, user_id, trail)
