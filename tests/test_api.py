"""Tests for the HTTP API."""

from datetime import UTC, datetime

import httpx
from fastapi.testclient import TestClient

from fit_tracker.api.app import create_app, error_status
from fit_tracker.domain.errors import (
    MalformedRecordError,
    NetworkUnavailableError,
    UnauthorizedError,
)

FOOD = {
    "mealType": "Breakfast",
    "foodName": "Oatmeal",
    "calories": 300,
    "protein": 10,
    "carbs": 54,
    "fat": 6,
}


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_food_log_crud(container) -> None:
    client = TestClient(create_app(container))

    created = client.post("/logs/food", json={"day": "2024-06-01", "entry": FOOD})
    assert created.status_code == 201
    entry_id = created.json()["entry"]["id"]

    listed = client.get("/logs/food", params={"day": "2024-06-01"})
    assert listed.status_code == 200
    assert [entry["id"] for entry in listed.json()["entries"]] == [entry_id]

    deleted = client.delete(f"/logs/food/{entry_id}")
    assert deleted.status_code == 200
    after = client.get("/logs/food", params={"day": "2024-06-01"})
    assert after.json()["entries"] == []


def test_unknown_category_is_not_found(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/logs/sleep", json={"entry": {}})

    assert response.status_code == 404


def test_invalid_entry_returns_error_alert(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/logs/food",
        json={"day": "2024-06-01", "entry": {**FOOD, "calories": "lots"}},
    )

    assert response.status_code == 422
    assert response.json()["error"].startswith("calories")


def test_store_errors_map_to_status(container, record_store) -> None:
    client = TestClient(create_app(container))

    record_store.error = NetworkUnavailableError("Store unreachable")
    offline = client.get("/logs/exercise", params={"day": "2024-06-01"})
    record_store.error = UnauthorizedError("Permission denied")
    denied = client.get("/logs/exercise", params={"day": "2024-06-01"})

    assert offline.status_code == 503
    assert offline.json() == {"error": "Store unreachable"}
    assert denied.status_code == 401


def test_error_status_defaults_to_server_error() -> None:
    assert error_status(MalformedRecordError("k", "bad")) == 500


def test_daily_summary(container) -> None:
    client = TestClient(create_app(container))
    client.post("/logs/food", json={"day": "2024-06-01", "entry": FOOD})

    response = client.get("/summary/2024-06-01")

    assert response.status_code == 200
    data = response.json()
    assert data["nutrition"]["calories"] == 300
    assert data["goals"]["calories"] == 2000
    assert data["calories_remaining"] == 1700
    assert data["health"] is None


def test_progress_endpoints(container) -> None:
    client = TestClient(create_app(container))

    weight = client.get("/progress/weight", params={"timeframe": "month"})
    exercise = client.get("/progress/exercise", params={"timeframe": "three_months"})
    invalid = client.get("/progress/weight", params={"timeframe": "year"})

    assert weight.status_code == 200
    assert weight.json()["points"] == []
    assert exercise.status_code == 200
    assert exercise.json()["totals"] == {
        "total_minutes": 0,
        "total_calories_burned": 0,
    }
    assert invalid.status_code == 422


def test_profile_replace_and_read(container, refresh_signal) -> None:
    client = TestClient(create_app(container))

    initial = client.get("/profile")
    saved = client.put(
        "/profile",
        json={"age": 34, "gender": "Male", "macro_goals": {"calories": 2500}},
    )
    fetched = client.get("/profile")

    assert initial.json()["profile"]["age"] == 25
    assert saved.status_code == 200
    assert fetched.json()["profile"]["age"] == 34
    assert fetched.json()["profile"]["macroGoals"]["calories"] == 2500
    assert fetched.json()["profile"]["macroGoals"]["protein"] == 150
    assert refresh_signal.requests == 1


def test_health_data_flow(container) -> None:
    client = TestClient(create_app(container))
    today = datetime.now(tz=UTC).date().isoformat()
    readings = {"steps": 5000, "active_energy": 250.0, "resting_energy": 1500.0}

    refused = client.post("/health-data/readings", json=readings)
    granted = client.put("/health-data/authorization", json={"granted": True})
    accepted = client.post("/health-data/readings", json=readings)
    snapshot = client.post("/health-data/snapshot")
    stored = client.get(f"/health-data/{today}")

    assert refused.status_code == 401
    assert granted.json() == {"authorization": "granted"}
    assert accepted.json()["total_calories_burned"] == 1750.0
    assert snapshot.status_code == 200
    assert stored.json()["snapshot"]["steps"] == 5000


def test_health_data_disconnect_zeroes_readings(container) -> None:
    client = TestClient(create_app(container))
    client.put("/health-data/authorization", json={"granted": True})
    client.post(
        "/health-data/readings",
        json={"steps": 5000, "active_energy": 250.0, "resting_energy": 1500.0},
    )

    disconnected = client.delete("/health-data/authorization")
    current = client.get("/health-data/readings")

    assert disconnected.json() == {"authorization": "denied"}
    assert current.json()["steps"] == 0


def test_missing_health_snapshot_is_not_found(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health-data/2024-06-01")

    assert response.status_code == 404
    assert response.json() == {"error": "No health data for 2024-06-01"}


def test_scan_barcode(container) -> None:
    client = TestClient(create_app(container))

    found = client.get("/scan/737628064502")
    missing = client.get("/scan/4006381333931")

    assert found.json()["found"] is True
    assert found.json()["food"]["name"] == "Thai Peanut Noodles"
    assert missing.json()["found"] is False


def test_scan_food_database_outage_returns_503(container, food_facts_client) -> None:
    request = httpx.Request("GET", "https://off.test/api/v0/product/1.json")
    food_facts_client.error = httpx.HTTPStatusError(
        "Bad gateway", request=request, response=httpx.Response(502, request=request)
    )
    client = TestClient(create_app(container))

    response = client.get("/scan/737628064502")

    assert response.status_code == 503
    assert response.json() == {"error": "Food database unreachable"}
