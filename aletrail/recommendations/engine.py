from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..data.store import TrailStore, public_brewery
from ..errors import NotFound
from .models import RecommendationResponse, RecommendationResult

MAX_RECOMMENDATIONS = 3

ALL_VISITED_MESSAGE = "You've visited all breweries! 🎉"
START_MESSAGE = "Start your journey at these breweries!"
MATCHED_MESSAGE = "Based on your ratings, we think you'll love these:"
KEEP_EXPLORING_MESSAGE = "Keep exploring!"
CONTINUE_REASON = "Continue your ale trail adventure!"


def _preferred_flavors(preferences: Any) -> set[str]:
    """Extract the flavor set from a loosely shaped preferences mapping."""
    if not isinstance(preferences, Mapping):
        return set()
    flavors = preferences.get("flavors")
    if not isinstance(flavors, (list, tuple, set)):
        return set()
    return {f for f in flavors if isinstance(f, str)}


def _menu(brewery: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    menu = brewery.get("beer_menu")
    if not isinstance(menu, list):
        return []
    return [beer for beer in menu if isinstance(beer, Mapping)]


def score_brewery(
    brewery: Mapping[str, Any], preferred: set[str],
) -> tuple[int, str | None]:
    """
    Count (beer, flavor) pairs on the menu whose flavor is preferred.

    Returns the score and a reason built from the first beer with any
    match, or ``None`` when nothing matched.
    """
    score = 0
    reason: str | None = None
    for beer in _menu(brewery):
        flavors = beer.get("flavors")
        if not isinstance(flavors, list):
            continue
        matching = [f for f in flavors if f in preferred]
        if not matching:
            continue
        score += len(matching)
        if reason is None:
            reason = f"Try their {beer.get('name')} - matches your love of {', '.join(matching)}"
    return score, reason


def recommend(
    preferences: Any,
    breweries: Iterable[Mapping[str, Any]],
    visited_ids: Iterable[Any],
) -> RecommendationResult:
    """
    Rank unvisited breweries by flavor overlap.

    Order of precedence:
    1. Nothing left to visit: empty list with a completion message.
    2. No flavor preferences: the first three unvisited breweries as given.
    3. Breweries with a positive score, highest first. Ties keep input order.
    4. No positive score: the first three unvisited with a generic reason.
    """
    visited = set(visited_ids)
    unvisited = [dict(b) for b in breweries if b.get("id") not in visited]

    if not unvisited:
        return RecommendationResult(recommendations=[], message=ALL_VISITED_MESSAGE)

    preferred = _preferred_flavors(preferences)
    if not preferred:
        return RecommendationResult(
            recommendations=unvisited[:MAX_RECOMMENDATIONS],
            message=START_MESSAGE,
        )

    scored: list[dict[str, Any]] = []
    for brewery in unvisited:
        score, reason = score_brewery(brewery, preferred)
        if score > 0:
            scored.append({**brewery, "score": score, "reason": reason})

    if not scored:
        return RecommendationResult(
            recommendations=[
                {**b, "reason": CONTINUE_REASON} for b in unvisited[:MAX_RECOMMENDATIONS]
            ],
            message=KEEP_EXPLORING_MESSAGE,
        )

    # sorted() is stable, so equal scores stay in position order
    scored = sorted(scored, key=lambda b: b["score"], reverse=True)
    return RecommendationResult(
        recommendations=scored[:MAX_RECOMMENDATIONS],
        message=MATCHED_MESSAGE,
    )


def get_user_recommendations(
    store: TrailStore, user_id: str, trail_subdomain: str,
) -> RecommendationResponse:
    trail = store.get_trail_by_subdomain(trail_subdomain)
    if trail is None:
        raise NotFound("Trail not found")

    preferences = store.get_user_preferences(user_id) or {}
    breweries = [public_brewery(b) for b in store.list_breweries(trail["id"])]
    stamps = store.list_user_stamps(user_id, trail["id"])
    visited_ids = [s["brewery_id"] for s in stamps]

    result = recommend(preferences, breweries, visited_ids)
    return RecommendationResponse(
        recommendations=result.recommendations,
        message=result.message,
        visited=len(visited_ids),
        total=len(breweries),
    )
