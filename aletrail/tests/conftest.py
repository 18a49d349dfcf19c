from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from aletrail.app import app
from aletrail.config import AppConfig, get_config
from aletrail.data import get_store
from aletrail.data.memory import MemoryStore

ADMIN_KEY = "test-admin-key"

TRAILS = [
    {"id": "trail-1", "subdomain": "hopvalley", "name": "Hop Valley Ale Trail",
     "is_active": True, "created_at": "2024-01-01T00:00:00+00:00"},
    {"id": "trail-2", "subdomain": "closed", "name": "Closed Trail",
     "is_active": False, "created_at": "2024-02-01T00:00:00+00:00"},
]

BREWERIES = [
    {
        "id": "b1", "trail_id": "trail-1", "name": "Northside Brewing", "position": 1,
        "secret_code": "Abc123",
        "beer_menu": [
            {"name": "Valley IPA", "flavors": ["hoppy", "citrus"]},
            {"name": "Pale Rider", "flavors": ["hoppy"]},
        ],
    },
    {
        "id": "b2", "trail_id": "trail-1", "name": "Stout House", "position": 2,
        "secret_code": "DARK99",
        "beer_menu": [{"name": "Midnight Stout", "flavors": ["chocolate", "roasty"]}],
    },
    {
        "id": "b3", "trail_id": "trail-1", "name": "Orchard Ciders", "position": 3,
        "secret_code": "apple7",
        "beer_menu": [{"name": "Dry Cider", "flavors": ["fruity", "citrus"]}],
    },
    {
        "id": "b4", "trail_id": "trail-1", "name": "Wild Yeast Co", "position": 4,
        "secret_code": "SOUR44",
        "beer_menu": [{"name": "Gose", "flavors": ["sour", "salty"]}],
    },
    {
        "id": "b5", "trail_id": "trail-1", "name": "Retired Brewery", "position": 5,
        "secret_code": "GONE", "is_active": False, "beer_menu": [],
    },
]

USERS = [
    {"id": "u-hoppy", "trail_id": "trail-1", "preferences": {"flavors": ["hoppy", "citrus"]}},
    {"id": "u-new", "trail_id": "trail-1", "preferences": {}},
    {"id": "u-sweet", "trail_id": "trail-1", "preferences": {"flavors": ["caramel"]}},
]


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore(trails=TRAILS, breweries=BREWERIES, users=USERS)


@pytest.fixture
def client(store: MemoryStore):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_config] = lambda: AppConfig(admin_key=ADMIN_KEY)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"x-admin-key": ADMIN_KEY}
