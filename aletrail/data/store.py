from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

Row = dict[str, Any]

# Columns safe to expose publicly; ``secret_code`` is never among them.
PUBLIC_BREWERY_COLUMNS: list[str] = [
    "id",
    "trail_id",
    "name",
    "subtitle",
    "district",
    "address",
    "tagline",
    "description",
    "facebook_url",
    "instagram_url",
    "website_url",
    "google_maps_url",
    "logo_url",
    "position",
    "beer_menu",
    "is_active",
]


def public_brewery(row: Row) -> Row:
    """Return a copy of a brewery row restricted to its public columns."""
    return {k: row[k] for k in PUBLIC_BREWERY_COLUMNS if k in row}


class TrailStore(ABC):
    """Data access over the trail tables.

    Every method returns plain dict rows as the store holds them. Lookups
    return ``None`` when nothing matches; errors from the backing store
    surface as :class:`~aletrail.errors.UpstreamFailure`.
    """

    # ── Trails ──────────────────────────────────────────────────────────

    @abstractmethod
    def get_trail_by_subdomain(self, subdomain: str, active_only: bool = False) -> Row | None:
        ...

    @abstractmethod
    def list_trails(self) -> list[Row]:
        """All trails, newest first."""

    # ── Breweries ───────────────────────────────────────────────────────

    @abstractmethod
    def get_brewery(self, brewery_id: str, active_only: bool = False) -> Row | None:
        """Full brewery row, including ``secret_code``."""

    @abstractmethod
    def list_breweries(self, trail_id: str) -> list[Row]:
        """Active breweries of a trail ordered by ``position``."""

    # ── Users ───────────────────────────────────────────────────────────

    @abstractmethod
    def get_user_preferences(self, user_id: str) -> dict[str, Any] | None:
        ...

    @abstractmethod
    def count_trail_users(self, trail_id: str) -> int:
        ...

    # ── Stamps ──────────────────────────────────────────────────────────

    @abstractmethod
    def find_stamp(self, user_id: str, brewery_id: str) -> Row | None:
        ...

    @abstractmethod
    def insert_stamp(self, user_id: str, brewery_id: str, trail_id: str, method: str) -> Row:
        """Insert a stamp unless one exists for the (user, brewery) pair.

        Raises :class:`~aletrail.errors.DuplicateRecord` when the pair
        already holds a stamp.
        """

    @abstractmethod
    def list_user_stamps(self, user_id: str, trail_id: str | None = None) -> list[Row]:
        """Stamps newest first, each with ``brewery: {name, position}``."""

    @abstractmethod
    def list_trail_stamps(self, trail_id: str) -> list[Row]:
        """Stamps of a trail, each with ``brewery: {name}``."""

    # ── Ratings ─────────────────────────────────────────────────────────

    @abstractmethod
    def find_rating(self, user_id: str, brewery_id: str, beer_id: str | None) -> Row | None:
        """Match on the triple; a ``None`` beer matches only NULL ``beer_id``."""

    @abstractmethod
    def insert_rating(self, row: Row) -> Row:
        ...

    @abstractmethod
    def update_rating(self, rating_id: str, changes: Row) -> Row:
        ...

    @abstractmethod
    def list_user_ratings(self, user_id: str) -> list[Row]:
        """Newest first, each with ``brewery: {name, logo_url}``."""

    @abstractmethod
    def list_brewery_ratings(self, brewery_id: str) -> list[Row]:
        """Newest first."""

    @abstractmethod
    def list_ratings_for_breweries(self, brewery_ids: list[str]) -> list[Row]:
        ...

    # ── Analytics ───────────────────────────────────────────────────────

    @abstractmethod
    def insert_analytics_event(
        self,
        trail_id: str | None,
        user_id: str | None,
        brewery_id: str | None,
        event_type: str,
        event_data: dict[str, Any],
    ) -> None:
        ...

    @abstractmethod
    def list_analytics_events(self, trail_id: str, since: datetime) -> list[Row]:
        """Events of a trail created at or after ``since``, newest first."""
