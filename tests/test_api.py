from __future__ import annotations

import pytest

from src.location_tracker.location_tracker.container import build_container
from src.location_tracker.location_tracker.core.exceptions import StoreUnavailable
from src.location_tracker.location_tracker.database.memory_record_store import InMemoryRecordStore
from src.location_tracker.location_tracker.main import create_app


class FailingStore(InMemoryRecordStore):
    def __init__(self, error: Exception):
        super().__init__()
        self._error = error

    def scan(self, table, predicate=None):
        raise self._error


def _client_with_store(store, *, debug=False):
    app = create_app("config.testing", container=build_container(store=store))
    app.config["DEBUG"] = debug
    return app.test_client()


def _create(client, employee_id="E1", **extra):
    body = {"employeeId": employee_id, "name": "A"}
    body.update(extra)
    return client.post("/api/employees", json=body)


def test_health_and_index(client):
    assert client.get("/health").get_json()["status"] == "healthy"
    assert client.get("/api/test").get_json()["status"] == "online"
    assert "/api/employees" in client.get("/api").get_json()["endpoints"]


def test_create_employee_hides_password(client):
    resp = _create(client, password="pw")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert "password" not in body["employee"]
    assert body["employee"]["status"] == "inactive"


def test_create_employee_validation_and_conflict(client):
    assert client.post("/api/employees", json={"name": "A"}).status_code == 400

    _create(client)
    resp = _create(client, name="Other")
    assert resp.status_code == 409
    assert "already exists" in resp.get_json()["error"]


def test_get_and_list_employees(client):
    _create(client)

    assert client.get("/api/employees/E1").get_json()["employeeId"] == "E1"
    assert client.get("/api/employees/missing").status_code == 404
    listed = client.get("/api/employees").get_json()
    assert [e["employeeId"] for e in listed] == ["E1"]
    assert all("password" not in e for e in listed)


def test_login_and_password_change_flow(client):
    _create(client)

    resp = client.post("/api/login", json={"employeeId": "E1", "password": "12345"})
    assert resp.status_code == 200
    assert resp.get_json()["requiresPasswordChange"] is True
    assert "password" not in resp.get_json()["employee"]

    assert client.post("/api/login", json={"employeeId": "E1", "password": "bad"}).status_code == 401
    assert client.post("/api/login", json={"employeeId": "nobody", "password": "12345"}).status_code == 401
    assert client.post("/api/login", json={"employeeId": "E1"}).status_code == 400

    resp = client.put("/api/employees/E1/password", json={"newPassword": "fresh"})
    assert resp.status_code == 200

    resp = client.put("/api/employees/E1/password", json={"oldPassword": "wrong", "newPassword": "x"})
    assert resp.status_code == 401
    assert client.put("/api/employees/E1/password", json={}).status_code == 400
    assert client.put("/api/employees/ghost/password", json={"newPassword": "x"}).status_code == 404

    resp = client.post("/api/login", json={"employeeId": "E1", "password": "fresh"})
    assert resp.get_json()["requiresPasswordChange"] is False


def test_location_endpoints(client):
    _create(client)
    resp = client.post(
        "/api/locations",
        json={"employeeId": "E1", "latitude": "12.9", "longitude": 77.6, "timestamp": "2026-02-01T08:00:00Z"},
    )
    assert resp.status_code == 200
    location = resp.get_json()["location"]
    assert location["latitude"] == 12.9
    assert location["timestamp"] == "2026-02-01T08:00:00.000Z"
    assert location["date"] == "2026-02-01"

    client.post(
        "/api/locations",
        json={"employeeId": "E1", "latitude": 13.0, "longitude": 77.7, "timestamp": "2026-02-01T09:00:00Z"},
    )

    assert client.post("/api/locations", json={"employeeId": "E1", "latitude": 1}).status_code == 400

    latest = client.get("/api/locations/latest").get_json()
    assert [(f["employeeId"], f["latitude"]) for f in latest] == [("E1", 13.0)]

    recent = client.get("/api/employees/E1/locations").get_json()
    assert [f["latitude"] for f in recent] == [13.0, 12.9]

    path = client.get("/api/employees/E1/path?date=2026-02-01").get_json()
    assert [f["latitude"] for f in path] == [12.9, 13.0]

    ranged = client.get(
        "/api/employees/E1/path?startDate=2026-02-01T08:30:00Z&endDate=2026-02-01T10:00:00Z"
    ).get_json()
    assert [f["latitude"] for f in ranged] == [13.0]

    searched = client.get("/api/locations?employeeId=E1&limit=1").get_json()
    assert [f["latitude"] for f in searched] == [13.0]
    assert client.get("/api/locations?limit=abc").status_code == 400

    employee = client.get("/api/employees/E1").get_json()
    assert employee["status"] == "active"
    assert employee["lastLatitude"] == 13.0


def test_attendance_endpoints(client):
    _create(client)

    assert client.post("/api/attendance/clock-out", json={"employeeId": "E1"}).status_code == 404

    resp = client.post("/api/attendance/clock-in", json={"employeeId": "E1"})
    assert resp.status_code == 200
    assert resp.get_json()["attendance"]["status"] == "present"
    assert client.post("/api/attendance/clock-in", json={"employeeId": "E1"}).status_code == 409
    assert client.post("/api/attendance/clock-in", json={"employeeId": "ghost"}).status_code == 404

    status = client.get("/api/attendance/status/E1").get_json()
    assert status["isClockedIn"] is True

    stats = client.get("/api/admin/stats").get_json()
    assert (stats["presentCount"], stats["activeCount"], stats["totalActiveEmployees"]) == (1, 1, 1)

    assert client.post("/api/attendance/clock-out", json={"employeeId": "E1"}).status_code == 200
    status = client.get("/api/attendance/status/E1").get_json()
    assert status["isClockedIn"] is False
    assert status["attendance"]["clockInTime"]
    assert status["attendance"]["clockOutTime"]

    history = client.get("/api/attendance?employeeId=E1").get_json()
    assert len(history) == 1
    assert client.get("/api/attendance").status_code == 400


def test_seed_endpoint_is_idempotent(client):
    first = client.post("/api/seed-test-data").get_json()
    second = client.post("/api/seed-test-data").get_json()

    assert (first["employees"], first["locations"]) == (2, 2)
    assert (second["employees"], second["locations"]) == (0, 0)
    assert len(client.get("/api/locations/latest").get_json()) == 2
    assert len(client.get("/api/locations").get_json()) == 2


def test_unknown_route_keeps_http_status(client):
    resp = client.get("/api/nothing-here")

    assert resp.status_code == 404
    assert "error" in resp.get_json()


@pytest.mark.parametrize(
    "path",
    ["/api/employees", "/api/locations", "/api/attendance/clock-in", "/api/login"],
)
def test_non_object_json_body_is_rejected(client, path):
    resp = client.post(path, json=["E1", 12.9, 77.6])

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Request body must be a JSON object"


def test_store_outage_returns_generic_500():
    client = _client_with_store(FailingStore(StoreUnavailable("connect to db-host:3306 refused")))

    resp = client.get("/api/employees")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Service temporarily unavailable"}
    assert "db-host" not in resp.get_data(as_text=True)


def test_unexpected_error_is_logged_and_hidden(caplog):
    client = _client_with_store(FailingStore(RuntimeError("cursor state leaked secret")))

    resp = client.get("/api/employees")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Something went wrong!"}
    assert "secret" not in resp.get_data(as_text=True)
    assert "unhandled error" in caplog.text


def test_unexpected_error_detail_shown_in_debug():
    client = _client_with_store(FailingStore(RuntimeError("cursor state leaked secret")), debug=True)

    resp = client.get("/api/employees")

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "cursor state leaked secret"
