from __future__ import annotations

from fastapi import APIRouter, Depends

from ..data import get_store
from ..data.store import TrailStore, public_brewery
from ..errors import InvalidInput, NotFound

router = APIRouter(prefix="/api/breweries", tags=["breweries"])


@router.get("")
def list_breweries(trail: str | None = None, store: TrailStore = Depends(get_store)) -> dict:
    if not trail:
        raise InvalidInput("Trail subdomain required")
    trail_row = store.get_trail_by_subdomain(trail)
    if trail_row is None:
        raise NotFound("Trail not found")
    breweries = [public_brewery(b) for b in store.list_breweries(trail_row["id"])]
    return {"success": True, "breweries": breweries}


@router.get("/{brewery_id}")
def get_brewery(brewery_id: str, store: TrailStore = Depends(get_store)) -> dict:
    brewery = store.get_brewery(brewery_id, active_only=True)
    if brewery is None:
        raise NotFound("Brewery not found")
    return {"success": True, "brewery": public_brewery(brewery)}
