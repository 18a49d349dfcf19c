from __future__ import annotations

import logging
from typing import Any

from ..data.store import TrailStore

logger = logging.getLogger(__name__)

STAMP_COLLECTED = "stamp_collected"
QR_SCANNED = "qr_scanned"
RATING_SUBMITTED = "rating_submitted"


def record_event(
    store: TrailStore,
    event_type: str,
    data: dict[str, Any],
    *,
    trail_id: str | None = None,
    user_id: str | None = None,
    brewery_id: str | None = None,
) -> bool:
    """
    Append an analytics event.

    Telemetry is best-effort: a failed write is logged and reported as
    ``False`` but never raised to the caller.
    """
    try:
        store.insert_analytics_event(trail_id, user_id, brewery_id, event_type, data)
    except Exception:
        logger.warning(
            "Failed to record %s event for user=%s brewery=%s",
            event_type, user_id, brewery_id,
            exc_info=True,
        )
        return False
    return True
