from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from aletrail.app import app
from aletrail.config import AppConfig, get_config
from aletrail.errors import UpstreamFailure


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["version"] == "1.0.0"
    assert "timestamp" in body


# ── Trails ───────────────────────────────────────────────────────────────


def test_get_trail(client):
    resp = client.get("/api/trails/hopvalley")
    assert resp.status_code == 200
    assert resp.json()["trail"]["name"] == "Hop Valley Ale Trail"


def test_inactive_trail_not_found(client):
    resp = client.get("/api/trails/closed")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Trail not found"}


def test_trail_stats(client):
    client.post("/api/validate", json={"breweryId": "b1", "code": "abc123", "userId": "u-new"})
    client.post("/api/ratings", json={"userId": "u-new", "breweryId": "b1", "rating": 5})
    client.post("/api/ratings", json={"userId": "u-hoppy", "breweryId": "b2", "rating": 4})

    resp = client.get("/api/trails/hopvalley/stats")
    assert resp.status_code == 200
    assert resp.json()["stats"] == {
        "totalStamps": 1,
        "totalRatings": 2,
        "totalUsers": 3,
        "averageRating": 4.5,
    }


def test_trail_stats_unknown_trail(client):
    assert client.get("/api/trails/nowhere/stats").status_code == 404


# ── Breweries ────────────────────────────────────────────────────────────


def test_list_breweries_in_position_order_without_codes(client):
    resp = client.get("/api/breweries", params={"trail": "hopvalley"})
    assert resp.status_code == 200
    breweries = resp.json()["breweries"]
    assert [b["id"] for b in breweries] == ["b1", "b2", "b3", "b4"]
    assert all("secret_code" not in b for b in breweries)


def test_list_breweries_requires_trail(client):
    resp = client.get("/api/breweries")
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Trail subdomain required"}


def test_list_breweries_unknown_trail(client):
    assert client.get("/api/breweries", params={"trail": "nowhere"}).status_code == 404


def test_get_brewery(client):
    resp = client.get("/api/breweries/b2")
    assert resp.status_code == 200
    brewery = resp.json()["brewery"]
    assert brewery["name"] == "Stout House"
    assert "secret_code" not in brewery


def test_inactive_brewery_not_found(client):
    resp = client.get("/api/breweries/b5")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Brewery not found"}


# ── Upstream failures ────────────────────────────────────────────────────


def test_upstream_failure_returns_error_envelope(client, store):
    with patch.object(store, "list_breweries", side_effect=UpstreamFailure("Data store request failed")):
        resp = client.get("/api/breweries", params={"trail": "hopvalley"})
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Data store request failed"}


def test_unexpected_error_returns_envelope(client, store):
    c = TestClient(app, raise_server_exceptions=False)
    with patch.object(store, "get_brewery", side_effect=RuntimeError("boom")):
        resp = c.get("/api/breweries/b1")
    assert resp.status_code == 500
    assert resp.json()["success"] is False


def test_unexpected_error_hides_details_in_production(client, store):
    app.dependency_overrides[get_config] = lambda: AppConfig(environment="production")
    c = TestClient(app, raise_server_exceptions=False)
    with patch.object(store, "get_brewery", side_effect=RuntimeError("secret detail")):
        resp = c.get("/api/breweries/b1")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Something went wrong"}


def test_unexpected_error_shows_details_outside_production(client, store):
    c = TestClient(app, raise_server_exceptions=False)
    with patch.object(store, "get_brewery", side_effect=RuntimeError("boom")):
        resp = c.get("/api/breweries/b1")
    assert resp.json() == {"success": False, "error": "boom"}
