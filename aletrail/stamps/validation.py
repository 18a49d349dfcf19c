from __future__ import annotations

import logging
from typing import Any

from ..analytics.events import STAMP_COLLECTED, record_event
from ..data.store import TrailStore
from ..errors import DuplicateRecord, InvalidInput, NotFound
from .models import ValidationResult

logger = logging.getLogger(__name__)

CODE_METHOD = "code"


def normalize_code(code: str) -> str:
    """Uppercase and trim a code so comparison ignores case and padding."""
    return code.strip().upper()


def codes_match(stored: str | None, submitted: str) -> bool:
    if not stored:
        return False
    return normalize_code(stored) == normalize_code(submitted)


def validate_code(
    store: TrailStore,
    brewery_id: str,
    code: str,
    user_id: str | None = None,
) -> ValidationResult:
    """
    Validate a brewery's secret code and collect a stamp for ``user_id``.

    - An invalid code never writes anything.
    - A valid code without a user is a preview: nothing is written.
    - A valid code with a user inserts the stamp only if the pair has none.
      The insert is conditional at the store, so concurrent or repeated
      calls create a single stamp and a single ``stamp_collected`` event.
    """
    if not brewery_id or not brewery_id.strip() or not code or not code.strip():
        raise InvalidInput("Brewery ID and code required")

    brewery = store.get_brewery(brewery_id)
    if brewery is None:
        raise NotFound("Brewery not found")

    if not codes_match(brewery.get("secret_code"), code):
        logger.info("Invalid code submitted for brewery %s", brewery_id)
        return ValidationResult(valid=False)

    if not user_id:
        return ValidationResult(valid=True)

    stamp_created = collect_stamp(store, brewery, user_id)
    return ValidationResult(valid=True, stamp_created=stamp_created)


def collect_stamp(store: TrailStore, brewery: dict[str, Any], user_id: str) -> bool:
    """Insert the stamp and its event; return ``False`` if already collected."""
    try:
        store.insert_stamp(user_id, brewery["id"], brewery.get("trail_id"), CODE_METHOD)
    except DuplicateRecord:
        logger.info("Stamp already collected: user=%s brewery=%s", user_id, brewery["id"])
        return False

    # Best-effort; a failed event never undoes the stamp.
    record_event(
        store,
        STAMP_COLLECTED,
        {"method": CODE_METHOD, "brewery_name": brewery.get("name")},
        trail_id=brewery.get("trail_id"),
        user_id=user_id,
        brewery_id=brewery["id"],
    )
    logger.info("Stamp collected: user=%s brewery=%s", user_id, brewery["id"])
    return True


def list_user_stamps(
    store: TrailStore,
    user_id: str,
    trail_subdomain: str | None = None,
) -> list[dict[str, Any]]:
    """Return a user's stamps, optionally limited to one trail.

    An unknown trail subdomain is ignored rather than treated as an error.
    """
    trail_id = None
    if trail_subdomain:
        trail = store.get_trail_by_subdomain(trail_subdomain)
        if trail is not None:
            trail_id = trail["id"]
    return store.list_user_stamps(user_id, trail_id)
