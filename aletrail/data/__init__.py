"""
Data access layer.

Responsibilities:
- Define the TrailStore interface the services and routes depend on.
- Provide the Supabase-backed store used in production.
- Provide an in-memory store for local development and tests.
"""

from __future__ import annotations

from .memory import MemoryStore
from .store import TrailStore

_store: TrailStore | None = None


def _build_store() -> TrailStore:
    from ..config import DEFAULT_CONFIG

    if DEFAULT_CONFIG.data_backend == "memory":
        return MemoryStore()

    from .supabase_store import SupabaseStore, create_supabase_client

    return SupabaseStore(create_supabase_client(DEFAULT_CONFIG))


def get_store() -> TrailStore:
    """Return the process-wide store, building it on first call."""
    global _store
    if _store is None:
        _store = _build_store()
    return _store
