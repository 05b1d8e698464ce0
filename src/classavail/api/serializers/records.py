from __future__ import annotations

from typing import Any

from ...core.records import AvailabilityRecord, ClassOccupancy


def record_to_item(rec: AvailabilityRecord) -> dict[str, Any]:
    return {
        "id": int(rec.id),
        "teacher": rec.teacher,
        "classCode": rec.class_code,
        # Read by browser clients written against the snake_case wire format.
        "class_code": rec.class_code,
        "slots": list(rec.slots),
        "createdAt": rec.created_at.isoformat(),
    }


def occupancy_to_item(occ: ClassOccupancy) -> dict[str, Any]:
    return {
        "classCode": occ.class_code,
        "occupied": dict(occ.occupied),
        "free": list(occ.free),
    }
