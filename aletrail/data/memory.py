from __future__ import annotations

import copy
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable

from ..errors import DuplicateRecord
from .store import Row, TrailStore

TABLES = ("trails", "breweries", "users", "stamps", "ratings", "analytics_events")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    # Naive timestamps are taken as UTC
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _newest_first(rows: Iterable[Row], column: str = "created_at") -> list[Row]:
    # Reversing first keeps later inserts ahead of earlier ones on equal timestamps.
    return sorted(reversed(list(rows)), key=lambda r: r.get(column) or "", reverse=True)


class MemoryStore(TrailStore):
    """In-process tables, used for local development and tests.

    Rows are deep-copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self, **tables: list[Row]) -> None:
        self._lock = threading.Lock()
        self.tables: dict[str, list[Row]] = {name: [] for name in TABLES}
        for name, rows in tables.items():
            self.seed(name, rows)

    def seed(self, table: str, rows: list[Row]) -> None:
        if table not in self.tables:
            raise KeyError(f"Unknown table: {table}")
        for row in rows:
            record = copy.deepcopy(row)
            record.setdefault("id", str(uuid.uuid4()))
            record.setdefault("created_at", _now())
            if table in ("trails", "breweries"):
                record.setdefault("is_active", True)
            self.tables[table].append(record)

    def _insert(self, table: str, row: Row) -> Row:
        record = copy.deepcopy(row)
        record.setdefault("id", str(uuid.uuid4()))
        record.setdefault("created_at", _now())
        self.tables[table].append(record)
        return copy.deepcopy(record)

    def _brewery_fields(self, brewery_id: str, fields: tuple[str, ...]) -> dict[str, Any] | None:
        for b in self.tables["breweries"]:
            if b["id"] == brewery_id:
                return {f: b.get(f) for f in fields}
        return None

    # ── Trails ──────────────────────────────────────────────────────────

    def get_trail_by_subdomain(self, subdomain: str, active_only: bool = False) -> Row | None:
        for t in self.tables["trails"]:
            if t.get("subdomain") == subdomain and (not active_only or t.get("is_active")):
                return copy.deepcopy(t)
        return None

    def list_trails(self) -> list[Row]:
        return copy.deepcopy(_newest_first(self.tables["trails"]))

    # ── Breweries ───────────────────────────────────────────────────────

    def get_brewery(self, brewery_id: str, active_only: bool = False) -> Row | None:
        for b in self.tables["breweries"]:
            if b["id"] == brewery_id and (not active_only or b.get("is_active")):
                return copy.deepcopy(b)
        return None

    def list_breweries(self, trail_id: str) -> list[Row]:
        rows = [
            b for b in self.tables["breweries"]
            if b.get("trail_id") == trail_id and b.get("is_active")
        ]
        rows.sort(key=lambda b: b.get("position") or 0)
        return copy.deepcopy(rows)

    # ── Users ───────────────────────────────────────────────────────────

    def get_user_preferences(self, user_id: str) -> dict[str, Any] | None:
        for u in self.tables["users"]:
            if u["id"] == user_id:
                return copy.deepcopy(u.get("preferences"))
        return None

    def count_trail_users(self, trail_id: str) -> int:
        return sum(1 for u in self.tables["users"] if u.get("trail_id") == trail_id)

    # ── Stamps ──────────────────────────────────────────────────────────

    def find_stamp(self, user_id: str, brewery_id: str) -> Row | None:
        for s in self.tables["stamps"]:
            if s["user_id"] == user_id and s["brewery_id"] == brewery_id:
                return copy.deepcopy(s)
        return None

    def insert_stamp(self, user_id: str, brewery_id: str, trail_id: str, method: str) -> Row:
        with self._lock:
            if self.find_stamp(user_id, brewery_id) is not None:
                raise DuplicateRecord(f"Stamp exists for user {user_id} at brewery {brewery_id}")
            now = _now()
            return self._insert("stamps", {
                "user_id": user_id,
                "brewery_id": brewery_id,
                "trail_id": trail_id,
                "validation_method": method,
                "validated_at": now,
                "created_at": now,
            })

    def list_user_stamps(self, user_id: str, trail_id: str | None = None) -> list[Row]:
        rows = [
            s for s in self.tables["stamps"]
            if s["user_id"] == user_id and (trail_id is None or s.get("trail_id") == trail_id)
        ]
        result = copy.deepcopy(_newest_first(rows, "validated_at"))
        for s in result:
            s["brewery"] = self._brewery_fields(s["brewery_id"], ("name", "position"))
        return result

    def list_trail_stamps(self, trail_id: str) -> list[Row]:
        result = copy.deepcopy([s for s in self.tables["stamps"] if s.get("trail_id") == trail_id])
        for s in result:
            s["brewery"] = self._brewery_fields(s["brewery_id"], ("name",))
        return result

    # ── Ratings ─────────────────────────────────────────────────────────

    def find_rating(self, user_id: str, brewery_id: str, beer_id: str | None) -> Row | None:
        for r in self.tables["ratings"]:
            if (
                r["user_id"] == user_id
                and r["brewery_id"] == brewery_id
                and r.get("beer_id") == beer_id
            ):
                return copy.deepcopy(r)
        return None

    def insert_rating(self, row: Row) -> Row:
        with self._lock:
            return self._insert("ratings", row)

    def update_rating(self, rating_id: str, changes: Row) -> Row:
        with self._lock:
            for r in self.tables["ratings"]:
                if r["id"] == rating_id:
                    r.update(copy.deepcopy(changes))
                    return copy.deepcopy(r)
        raise KeyError(f"Unknown rating: {rating_id}")

    def list_user_ratings(self, user_id: str) -> list[Row]:
        rows = [r for r in self.tables["ratings"] if r["user_id"] == user_id]
        result = copy.deepcopy(_newest_first(rows))
        for r in result:
            r["brewery"] = self._brewery_fields(r["brewery_id"], ("name", "logo_url"))
        return result

    def list_brewery_ratings(self, brewery_id: str) -> list[Row]:
        rows = [r for r in self.tables["ratings"] if r["brewery_id"] == brewery_id]
        return copy.deepcopy(_newest_first(rows))

    def list_ratings_for_breweries(self, brewery_ids: list[str]) -> list[Row]:
        wanted = set(brewery_ids)
        return copy.deepcopy([r for r in self.tables["ratings"] if r["brewery_id"] in wanted])

    # ── Analytics ───────────────────────────────────────────────────────

    def insert_analytics_event(
        self,
        trail_id: str | None,
        user_id: str | None,
        brewery_id: str | None,
        event_type: str,
        event_data: dict[str, Any],
    ) -> None:
        with self._lock:
            self._insert("analytics_events", {
                "trail_id": trail_id,
                "user_id": user_id,
                "brewery_id": brewery_id,
                "event_type": event_type,
                "event_data": event_data,
            })

    def list_analytics_events(self, trail_id: str, since: datetime) -> list[Row]:
        rows = [
            e for e in self.tables["analytics_events"]
            if e.get("trail_id") == trail_id
            and _parse_timestamp(e["created_at"]) >= since
        ]
        return copy.deepcopy(_newest_first(rows))
