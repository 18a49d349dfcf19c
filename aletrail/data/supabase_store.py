from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client, create_client

from ..config import AppConfig
from ..errors import DuplicateRecord, UpstreamFailure
from .store import PUBLIC_BREWERY_COLUMNS, Row, TrailStore

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

_BREWERY_COLUMNS = ", ".join(PUBLIC_BREWERY_COLUMNS + ["secret_code"])


def create_supabase_client(config: AppConfig) -> Client:
    """Create a Supabase client from the configured URL and service key."""
    if not config.supabase_url or not config.supabase_key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
    return create_client(config.supabase_url, config.supabase_key)


class SupabaseStore(TrailStore):
    """TrailStore backed by the Supabase (PostgREST) tables.

    Stamps are checked before insert and guarded by the unique index
    ``stamps_user_brewery_key`` declared in ``schema.sql``; either way a
    second stamp for the pair surfaces as :class:`DuplicateRecord`.
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    def _execute(self, query: Any) -> list[Row]:
        try:
            response = query.execute()
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise DuplicateRecord(exc.message) from exc
            logger.error("Supabase query failed: %s (%s)", exc.message, exc.code)
            raise UpstreamFailure("Data store request failed") from exc
        return response.data or []

    def _first(self, query: Any) -> Row | None:
        rows = self._execute(query.limit(1))
        return rows[0] if rows else None

    # ── Trails ──────────────────────────────────────────────────────────

    def get_trail_by_subdomain(self, subdomain: str, active_only: bool = False) -> Row | None:
        query = self.client.table("trails").select("*").eq("subdomain", subdomain)
        if active_only:
            query = query.eq("is_active", True)
        return self._first(query)

    def list_trails(self) -> list[Row]:
        return self._execute(
            self.client.table("trails").select("*").order("created_at", desc=True)
        )

    # ── Breweries ───────────────────────────────────────────────────────

    def get_brewery(self, brewery_id: str, active_only: bool = False) -> Row | None:
        query = self.client.table("breweries").select(_BREWERY_COLUMNS).eq("id", brewery_id)
        if active_only:
            query = query.eq("is_active", True)
        return self._first(query)

    def list_breweries(self, trail_id: str) -> list[Row]:
        return self._execute(
            self.client.table("breweries")
            .select(_BREWERY_COLUMNS)
            .eq("trail_id", trail_id)
            .eq("is_active", True)
            .order("position")
        )

    # ── Users ───────────────────────────────────────────────────────────

    def get_user_preferences(self, user_id: str) -> dict[str, Any] | None:
        row = self._first(self.client.table("users").select("preferences").eq("id", user_id))
        return row.get("preferences") if row else None

    def count_trail_users(self, trail_id: str) -> int:
        return len(self._execute(self.client.table("users").select("id").eq("trail_id", trail_id)))

    # ── Stamps ──────────────────────────────────────────────────────────

    def find_stamp(self, user_id: str, brewery_id: str) -> Row | None:
        return self._first(
            self.client.table("stamps")
            .select("*")
            .eq("user_id", user_id)
            .eq("brewery_id", brewery_id)
        )

    def insert_stamp(self, user_id: str, brewery_id: str, trail_id: str, method: str) -> Row:
        # The unique index in schema.sql catches inserts racing past this check.
        if self.find_stamp(user_id, brewery_id) is not None:
            raise DuplicateRecord(f"Stamp exists for user {user_id} at brewery {brewery_id}")
        rows = self._execute(
            self.client.table("stamps").insert({
                "user_id": user_id,
                "brewery_id": brewery_id,
                "trail_id": trail_id,
                "validation_method": method,
            })
        )
        return rows[0] if rows else {}

    def list_user_stamps(self, user_id: str, trail_id: str | None = None) -> list[Row]:
        query = (
            self.client.table("stamps")
            .select("*, brewery:breweries(name, position)")
            .eq("user_id", user_id)
        )
        if trail_id is not None:
            query = query.eq("trail_id", trail_id)
        return self._execute(query.order("validated_at", desc=True))

    def list_trail_stamps(self, trail_id: str) -> list[Row]:
        return self._execute(
            self.client.table("stamps")
            .select("brewery_id, brewery:breweries(name)")
            .eq("trail_id", trail_id)
        )

    # ── Ratings ─────────────────────────────────────────────────────────

    def find_rating(self, user_id: str, brewery_id: str, beer_id: str | None) -> Row | None:
        query = (
            self.client.table("ratings")
            .select("*")
            .eq("user_id", user_id)
            .eq("brewery_id", brewery_id)
        )
        if beer_id is None:
            query = query.is_("beer_id", "null")
        else:
            query = query.eq("beer_id", beer_id)
        return self._first(query)

    def insert_rating(self, row: Row) -> Row:
        rows = self._execute(self.client.table("ratings").insert(row))
        return rows[0] if rows else dict(row)

    def update_rating(self, rating_id: str, changes: Row) -> Row:
        rows = self._execute(self.client.table("ratings").update(changes).eq("id", rating_id))
        return rows[0] if rows else {"id": rating_id, **changes}

    def list_user_ratings(self, user_id: str) -> list[Row]:
        return self._execute(
            self.client.table("ratings")
            .select("*, brewery:breweries(name, logo_url)")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
        )

    def list_brewery_ratings(self, brewery_id: str) -> list[Row]:
        return self._execute(
            self.client.table("ratings")
            .select("rating, review, flavors_enjoyed, created_at")
            .eq("brewery_id", brewery_id)
            .order("created_at", desc=True)
        )

    def list_ratings_for_breweries(self, brewery_ids: list[str]) -> list[Row]:
        if not brewery_ids:
            return []
        return self._execute(
            self.client.table("ratings").select("rating, brewery_id").in_("brewery_id", brewery_ids)
        )

    # ── Analytics ───────────────────────────────────────────────────────

    def insert_analytics_event(
        self,
        trail_id: str | None,
        user_id: str | None,
        brewery_id: str | None,
        event_type: str,
        event_data: dict[str, Any],
    ) -> None:
        self._execute(
            self.client.table("analytics_events").insert({
                "trail_id": trail_id,
                "user_id": user_id,
                "brewery_id": brewery_id,
                "event_type": event_type,
                "event_data": event_data,
            })
        )

    def list_analytics_events(self, trail_id: str, since: datetime) -> list[Row]:
        return self._execute(
            self.client.table("analytics_events")
            .select("*")
            .eq("trail_id", trail_id)
            .gte("created_at", since.isoformat())
            .order("created_at", desc=True)
        )
