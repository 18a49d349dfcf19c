from __future__ import annotations

from collections import Counter
from typing import Any

from .events import QR_SCANNED, RATING_SUBMITTED, STAMP_COLLECTED

RECENT_EVENTS_LIMIT = 20


def compute_trail_analytics(
    events: list[dict[str, Any]],
    stamps: list[dict[str, Any]],
    total_users: int,
) -> dict[str, Any]:
    """Summarise a trail's events and stamps for the admin dashboard.

    ``events`` are expected newest first; the first twenty are returned
    as ``recentEvents``.
    """
    type_counter: Counter[str] = Counter(e.get("event_type") for e in events)

    brewery_counter: Counter[str] = Counter()
    for s in stamps:
        brewery = s.get("brewery") or {}
        brewery_counter[brewery.get("name") or "Unknown"] += 1

    return {
        "stats": {
            "totalEvents": len(events),
            "stampCollections": type_counter[STAMP_COLLECTED],
            "qrScans": type_counter[QR_SCANNED],
            "ratingsSubmitted": type_counter[RATING_SUBMITTED],
            "totalUsers": total_users,
        },
        "stampsByBrewery": dict(brewery_counter),
        "recentEvents": events[:RECENT_EVENTS_LIMIT],
    }


def compute_trail_stats(
    total_stamps: int,
    total_users: int,
    ratings: list[dict[str, Any]],
) -> dict[str, Any]:
    values = [r["rating"] for r in ratings if r.get("rating") is not None]
    return {
        "totalStamps": total_stamps,
        "totalRatings": len(values),
        "totalUsers": total_users,
        "averageRating": round(sum(values) / len(values), 2) if values else 0,
    }
