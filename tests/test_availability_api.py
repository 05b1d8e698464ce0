from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from classavail.api import create_api_app
from classavail.config import Settings
from classavail.core.errors import StoreError
from classavail.core.registry import AvailabilityRegistry
from classavail.store import InMemoryStore, SqliteStore


def _client() -> TestClient:
    registry = AvailabilityRegistry(InMemoryStore())
    return TestClient(create_api_app(registry, settings=Settings()))


def _post(client: TestClient, teacher: str, class_code: str, slots: list[str]):
    return client.post("/api/availabilities", json={"teacher": teacher, "classCode": class_code, "slots": slots})


def test_crud_round_trip_over_http() -> None:
    client = _client()

    res = _post(client, "Alice", "MATH101", ["09:00-10:00", "08:00-09:00"])
    assert res.status_code == 201
    a = res.json()
    assert a["id"] == 1
    assert a["classCode"] == "MATH101"
    assert a["slots"] == ["08:00-09:00", "09:00-10:00"]
    assert "createdAt" in a

    res = _post(client, "Bob", "MATH101", ["09:00-10:00"])
    assert res.status_code == 409
    body = res.json()
    assert body["code"] == "ConflictError"
    assert body["details"] == {"slots": ["09:00-10:00"], "conflictingIds": [1]}
    assert "already booked" in body["error"]

    res = client.put("/api/availabilities/1", json={"teacher": "Alice", "classCode": "MATH101", "slots": ["10:00-11:00"]})
    assert res.status_code == 200
    assert res.json()["slots"] == ["10:00-11:00"]
    assert res.json()["createdAt"] == a["createdAt"]

    res = _post(client, "Bob", "MATH101", ["09:00-10:00"])
    assert res.status_code == 201
    b = res.json()

    listed = client.get("/api/availabilities").json()
    assert [r["id"] for r in listed] == [b["id"], a["id"]]

    assert client.get(f"/api/availabilities/{b['id']}").json()["teacher"] == "Bob"

    res = client.delete("/api/availabilities/1")
    assert res.status_code == 200
    assert res.json() == {"ok": True, "id": 1}
    assert client.delete("/api/availabilities/1").status_code == 404
    assert [r["id"] for r in client.get("/api/availabilities").json()] == [b["id"]]


def test_snake_case_class_code_is_accepted() -> None:
    client = _client()
    res = client.post("/api/availabilities", json={"teacher": "Alice", "class_code": "MATH101", "slots": ["08:00-09:00"]})
    assert res.status_code == 201
    assert res.json()["classCode"] == "MATH101"


def test_validation_failures_are_400() -> None:
    client = _client()
    for payload in (
        {"teacher": "", "classCode": "MATH101", "slots": ["08:00-09:00"]},
        {"teacher": "Alice", "slots": ["08:00-09:00"]},
        {"teacher": "Alice", "classCode": "MATH101", "slots": []},
        {"teacher": "Alice", "classCode": "MATH101", "slots": "08:00-09:00"},
        {"teacher": "Alice", "classCode": "MATH101", "slots": ["07:00-08:00"]},
    ):
        res = client.post("/api/availabilities", json=payload)
        assert res.status_code == 400, payload
        assert res.json()["code"] == "ValidationError"
    assert client.get("/api/availabilities").json() == []


def test_bad_and_missing_ids() -> None:
    client = _client()
    assert client.delete("/api/availabilities/abc").status_code == 400
    assert client.delete("/api/availabilities/0").status_code == 400
    assert client.get("/api/availabilities/5").status_code == 404

    res = client.put("/api/availabilities/5", json={"teacher": "A", "classCode": "C", "slots": ["08:00-09:00"]})
    assert res.status_code == 404
    assert res.json()["details"] == {"id": 5}


def test_slots_and_class_occupancy_endpoints() -> None:
    client = _client()
    slots = client.get("/api/slots").json()["slots"]
    assert len(slots) == 9

    _post(client, "Alice", "MATH 101", ["08:00-09:00"])
    occ = client.get("/api/classes/MATH%20101/slots").json()
    assert occ["classCode"] == "MATH 101"
    assert occ["occupied"] == {"08:00-09:00": "Alice"}
    assert occ["free"] == slots[1:]


def test_store_failure_is_generic_500() -> None:
    class BrokenStore(InMemoryStore):
        def list_all(self):
            raise StoreError("disk on fire")

    client = TestClient(create_api_app(AvailabilityRegistry(BrokenStore()), settings=Settings()))
    res = client.get("/api/availabilities")
    assert res.status_code == 500
    assert res.json()["error"] == "DB error"
    assert "disk" not in res.text


def test_healthz() -> None:
    assert _client().get("/healthz").json() == {"ok": True}


def _sqlite_client(tmp_path: Path) -> TestClient:
    registry = AvailabilityRegistry(SqliteStore(tmp_path / "db.sqlite"))
    return TestClient(create_api_app(registry, settings=Settings()))


def test_crud_and_conflicts_over_sqlite(tmp_path: Path) -> None:
    client = _sqlite_client(tmp_path)

    a = _post(client, "Alice", "MATH101", ["08:00-09:00", "09:00-10:00"]).json()
    res = _post(client, "Bob", "MATH101", ["09:00-10:00"])
    assert res.status_code == 409
    assert res.json()["details"]["conflictingIds"] == [a["id"]]

    res = client.put(f"/api/availabilities/{a['id']}", json={"teacher": "Alice", "classCode": "MATH101", "slots": ["10:00-11:00"]})
    assert res.status_code == 200
    b = _post(client, "Bob", "MATH101", ["09:00-10:00"]).json()

    assert [r["id"] for r in client.get("/api/availabilities").json()] == [b["id"], a["id"]]
    assert client.delete(f"/api/availabilities/{a['id']}").status_code == 200
    assert client.delete(f"/api/availabilities/{a['id']}").status_code == 404


def test_ids_beyond_integer_range_are_not_found(tmp_path: Path) -> None:
    client = _sqlite_client(tmp_path)
    _post(client, "Alice", "MATH101", ["08:00-09:00"])
    huge = "99999999999999999999"

    assert client.get(f"/api/availabilities/{huge}").status_code == 404
    assert client.delete(f"/api/availabilities/{huge}").status_code == 404
    res = client.put(f"/api/availabilities/{huge}", json={"teacher": "A", "classCode": "MATH101", "slots": ["09:00-10:00"]})
    assert res.status_code == 404
    assert res.json()["code"] == "NotFoundError"


def test_non_ascii_digit_id_is_400() -> None:
    client = _client()
    for raw in ("²", "٣", "１"):
        res = client.get(f"/api/availabilities/{raw}")
        assert res.status_code == 400, raw
        assert res.json()["code"] == "ValidationError"


def test_non_object_bodies_are_400_validation_errors() -> None:
    client = _client()
    for kwargs in (
        {"json": ["x"]},
        {"json": "teacher"},
        {"json": None},
        {},
        {"content": b"{not json", "headers": {"content-type": "application/json"}},
    ):
        res = client.post("/api/availabilities", **kwargs)
        assert res.status_code == 400, kwargs
        assert res.json()["code"] == "ValidationError"

    _post(client, "Alice", "MATH101", ["08:00-09:00"])
    res = client.put("/api/availabilities/1", json=[1, 2])
    assert res.status_code == 400
    assert res.json()["code"] == "ValidationError"


def test_records_also_carry_snake_case_class_code() -> None:
    client = _client()
    _post(client, "Alice", "MATH101", ["08:00-09:00"])
    item = client.get("/api/availabilities").json()[0]
    assert item["class_code"] == item["classCode"] == "MATH101"
