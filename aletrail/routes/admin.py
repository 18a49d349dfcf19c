from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, Query

from ..analytics.aggregator import compute_trail_analytics
from ..auth.dependencies import require_admin
from ..data import get_store
from ..data.store import TrailStore

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/trails")
def admin_trails(store: TrailStore = Depends(get_store)) -> dict:
    return {"success": True, "trails": store.list_trails()}


@router.get("/analytics/{trail_id}")
def admin_analytics(
    trail_id: str,
    days: int = Query(default=30, ge=1),
    store: TrailStore = Depends(get_store),
) -> dict:
    since = datetime.now(timezone.utc) - timedelta(days=days)
    summary = compute_trail_analytics(
        events=store.list_analytics_events(trail_id, since),
        stamps=store.list_trail_stamps(trail_id),
        total_users=store.count_trail_users(trail_id),
    )
    return {"success": True, **summary}
