from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from aletrail.errors import InvalidInput, NotFound
from aletrail.stamps.validation import codes_match, validate_code


def _stamps(store):
    return store.tables["stamps"]


def _events(store, event_type="stamp_collected"):
    return [e for e in store.tables["analytics_events"] if e["event_type"] == event_type]


# ── Service ──────────────────────────────────────────────────────────────


@pytest.mark.parametrize("submitted", [" abc123 ", "ABC123", "abc123", "Abc123"])
def test_code_comparison_ignores_case_and_padding(submitted):
    assert codes_match("Abc123", submitted)


def test_wrong_code_does_not_match():
    assert not codes_match("Abc123", "abc124")
    assert not codes_match(None, "abc123")


def test_repeated_validation_creates_one_stamp_and_one_event(store):
    first = validate_code(store, "b1", "abc123", "u-new")
    second = validate_code(store, "b1", "ABC123", "u-new")

    assert first.valid and first.stamp_created
    assert second.valid and not second.stamp_created
    assert len(_stamps(store)) == 1
    assert len(_events(store)) == 1

    event = _events(store)[0]
    assert event["event_data"] == {"method": "code", "brewery_name": "Northside Brewing"}
    assert event["trail_id"] == "trail-1"
    assert _stamps(store)[0]["validation_method"] == "code"


@pytest.mark.parametrize("user_id", [None, "u-new"])
def test_wrong_code_never_writes(store, user_id):
    result = validate_code(store, "b1", "nope", user_id)
    assert not result.valid
    assert not result.stamp_created
    assert _stamps(store) == []
    assert store.tables["analytics_events"] == []


def test_valid_code_without_user_is_preview(store):
    result = validate_code(store, "b1", "abc123")
    assert result.valid
    assert not result.stamp_created
    assert _stamps(store) == []
    assert store.tables["analytics_events"] == []


def test_unknown_brewery_raises_not_found(store):
    with pytest.raises(NotFound):
        validate_code(store, "missing", "abc123", "u-new")


@pytest.mark.parametrize("brewery_id,code", [("", "abc"), ("b1", ""), ("b1", "   ")])
def test_missing_fields_raise_invalid_input(store, brewery_id, code):
    with pytest.raises(InvalidInput):
        validate_code(store, brewery_id, code, "u-new")


def test_analytics_failure_does_not_fail_validation(store):
    with patch.object(store, "insert_analytics_event", side_effect=RuntimeError("down")):
        result = validate_code(store, "b2", "dark99", "u-new")
    assert result.valid and result.stamp_created
    assert len(_stamps(store)) == 1


def test_concurrent_validation_creates_single_stamp(store):
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: validate_code(store, "b3", "APPLE7", "u-new"), range(16)))

    assert all(r.valid for r in results)
    assert sum(r.stamp_created for r in results) == 1
    assert len(_stamps(store)) == 1
    assert len(_events(store)) == 1


# ── HTTP ─────────────────────────────────────────────────────────────────


def test_validate_endpoint_collects_stamp(client, store):
    resp = client.post("/api/validate", json={"breweryId": "b1", "code": " abc123 ", "userId": "u-new"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["valid"] is True
    assert body["stampCreated"] is True
    assert body["breweryId"] == "b1"
    assert body["message"] == "Code validated successfully!"


def test_validate_endpoint_second_call_reports_existing_stamp(client, store):
    payload = {"breweryId": "b1", "code": "ABC123", "userId": "u-new"}
    client.post("/api/validate", json=payload)
    body = client.post("/api/validate", json=payload).json()
    assert body["valid"] is True
    assert body["stampCreated"] is False
    assert body["message"] == "Stamp already collected"
    assert len(_stamps(store)) == 1


def test_validate_endpoint_invalid_code(client):
    resp = client.post("/api/validate", json={"breweryId": "b1", "code": "wrong"})
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "valid": False,
        "message": "Invalid code",
        "breweryId": None,
        "stampCreated": False,
    }


def test_validate_endpoint_unknown_brewery(client):
    resp = client.post("/api/validate", json={"breweryId": "zzz", "code": "abc"})
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Brewery not found"}


def test_validate_endpoint_requires_code(client):
    resp = client.post("/api/validate", json={"breweryId": "b1"})
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_user_stamps_listing(client):
    client.post("/api/validate", json={"breweryId": "b1", "code": "abc123", "userId": "u-new"})
    client.post("/api/validate", json={"breweryId": "b2", "code": "dark99", "userId": "u-new"})

    resp = client.get("/api/validate/stamps/u-new", params={"trail": "hopvalley"})
    assert resp.status_code == 200
    stamps = resp.json()["stamps"]
    assert [s["brewery_id"] for s in stamps] == ["b2", "b1"]
    assert stamps[0]["brewery"] == {"name": "Stout House", "position": 2}


def test_user_stamps_unknown_trail_is_ignored(client):
    client.post("/api/validate", json={"breweryId": "b1", "code": "abc123", "userId": "u-new"})
    resp = client.get("/api/validate/stamps/u-new", params={"trail": "nowhere"})
    assert len(resp.json()["stamps"]) == 1
