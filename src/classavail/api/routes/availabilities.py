from __future__ import annotations

from typing import Any

from fastapi import Body, FastAPI

from ...core.registry import AvailabilityRegistry
from ...core.slots import TIME_SLOTS
from ..parsing import parse_record_body, parse_record_id
from ..serializers import occupancy_to_item, record_to_item


def mount_availability_api(app: FastAPI, registry: AvailabilityRegistry) -> None:
    """Mount the availability CRUD endpoints and the per-class slot view.

    Registry errors propagate to the app-level `AvailabilityError` handler.
    """

    @app.get("/api/slots")
    def list_slots() -> dict[str, list[str]]:
        return {"slots": list(TIME_SLOTS)}

    @app.get("/api/availabilities")
    def list_availabilities() -> list[dict[str, Any]]:
        return [record_to_item(r) for r in registry.list_all()]

    @app.get("/api/availabilities/{record_id}")
    def get_availability(record_id: str) -> dict[str, Any]:
        return record_to_item(registry.get(parse_record_id(record_id)))

    @app.post("/api/availabilities", status_code=201)
    def create_availability(body: Any = Body(None)) -> dict[str, Any]:
        teacher, class_code, slots = parse_record_body(body)
        return record_to_item(registry.create(teacher, class_code, slots))

    @app.put("/api/availabilities/{record_id}")
    def update_availability(record_id: str, body: Any = Body(None)) -> dict[str, Any]:
        rid = parse_record_id(record_id)
        teacher, class_code, slots = parse_record_body(body)
        return record_to_item(registry.update(rid, teacher, class_code, slots))

    @app.delete("/api/availabilities/{record_id}")
    def delete_availability(record_id: str) -> dict[str, Any]:
        rid = parse_record_id(record_id)
        registry.delete(rid)
        return {"ok": True, "id": rid}

    @app.get("/api/classes/{class_code}/slots")
    def get_class_slots(class_code: str) -> dict[str, Any]:
        return occupancy_to_item(registry.occupancy(class_code))
