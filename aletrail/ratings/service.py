from __future__ import annotations

import logging
from typing import Any

from ..analytics.events import RATING_SUBMITTED, record_event
from ..data.store import TrailStore
from ..errors import InvalidInput
from .models import MAX_RATING, MIN_RATING, RatingStats, RatingSubmission

logger = logging.getLogger(__name__)


def _validate(submission: RatingSubmission) -> None:
    if not submission.user_id or not submission.brewery_id or not submission.rating:
        raise InvalidInput("userId, breweryId, and rating required")
    if not MIN_RATING <= submission.rating <= MAX_RATING:
        raise InvalidInput(f"Rating must be between {MIN_RATING} and {MAX_RATING}")


def submit_rating(store: TrailStore, submission: RatingSubmission) -> dict[str, Any]:
    """
    Create or update the rating for (user, brewery, beer).

    A missing or blank ``beer_id`` is stored as NULL and means a rating of
    the brewery as a whole. Out-of-range ratings are rejected before any
    read or write.
    """
    _validate(submission)
    beer_id = submission.beer_id or None

    changes = {
        "rating": submission.rating,
        "review": submission.review,
        "flavors_enjoyed": submission.flavors_enjoyed,
    }

    existing = store.find_rating(submission.user_id, submission.brewery_id, beer_id)
    if existing is not None:
        result = store.update_rating(existing["id"], changes)
    else:
        result = store.insert_rating({
            "user_id": submission.user_id,
            "brewery_id": submission.brewery_id,
            "beer_id": beer_id,
            **changes,
        })

    _record_rating_event(store, submission, beer_id, updated=existing is not None)
    return result


def _record_rating_event(
    store: TrailStore,
    submission: RatingSubmission,
    beer_id: str | None,
    updated: bool,
) -> None:
    try:
        brewery = store.get_brewery(submission.brewery_id)
    except Exception:
        logger.warning("Could not resolve trail for brewery %s", submission.brewery_id, exc_info=True)
        brewery = None

    record_event(
        store,
        RATING_SUBMITTED,
        {"rating": submission.rating, "beer_id": beer_id, "updated": updated},
        trail_id=brewery.get("trail_id") if brewery else None,
        user_id=submission.user_id,
        brewery_id=submission.brewery_id,
    )


def list_user_ratings(store: TrailStore, user_id: str) -> list[dict[str, Any]]:
    return store.list_user_ratings(user_id)


def summarize_ratings(ratings: list[dict[str, Any]]) -> RatingStats:
    values = [r["rating"] for r in ratings]
    distribution = {v: 0 for v in range(MIN_RATING, MAX_RATING + 1)}
    for v in values:
        if v in distribution:
            distribution[v] += 1
    return RatingStats(
        averageRating=round(sum(values) / len(values), 1) if values else 0.0,
        totalRatings=len(values),
        distribution=distribution,
    )


def brewery_rating_summary(
    store: TrailStore, brewery_id: str,
) -> tuple[list[dict[str, Any]], RatingStats]:
    ratings = store.list_brewery_ratings(brewery_id)
    return ratings, summarize_ratings(ratings)
