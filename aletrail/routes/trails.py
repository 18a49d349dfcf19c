from __future__ import annotations

from fastapi import APIRouter, Depends

from ..analytics.aggregator import compute_trail_stats
from ..data import get_store
from ..data.store import TrailStore
from ..errors import NotFound

router = APIRouter(prefix="/api/trails", tags=["trails"])


@router.get("/{subdomain}")
def get_trail(subdomain: str, store: TrailStore = Depends(get_store)) -> dict:
    trail = store.get_trail_by_subdomain(subdomain, active_only=True)
    if trail is None:
        raise NotFound("Trail not found")
    return {"success": True, "trail": trail}


@router.get("/{subdomain}/stats")
def get_trail_stats(subdomain: str, store: TrailStore = Depends(get_store)) -> dict:
    trail = store.get_trail_by_subdomain(subdomain)
    if trail is None:
        raise NotFound("Trail not found")

    brewery_ids = [b["id"] for b in store.list_breweries(trail["id"])]
    stats = compute_trail_stats(
        total_stamps=len(store.list_trail_stamps(trail["id"])),
        total_users=store.count_trail_users(trail["id"]),
        ratings=store.list_ratings_for_breweries(brewery_ids),
    )
    return {"success": True, "stats": stats}
