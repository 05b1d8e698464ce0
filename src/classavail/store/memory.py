from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timezone

from ..core.records import AvailabilityRecord
from ..core.slots import sort_slots
from .base import newest_first


class InMemoryStore:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._records: dict[int, AvailabilityRecord] = {}
        # Ids are never reused, even after delete.
        self._last_id = 0

    def insert(self, *, teacher: str, class_code: str, slots: tuple[str, ...]) -> AvailabilityRecord:
        with self._lock:
            self._last_id += 1
            rec = AvailabilityRecord(
                id=self._last_id,
                teacher=teacher,
                class_code=class_code,
                slots=sort_slots(slots),
                created_at=datetime.now(timezone.utc),
            )
            self._records[rec.id] = rec
            return rec

    def get(self, record_id: int) -> AvailabilityRecord | None:
        with self._lock:
            return self._records.get(int(record_id))

    def list_all(self) -> list[AvailabilityRecord]:
        with self._lock:
            return newest_first(list(self._records.values()))

    def list_by_class(self, class_code: str, *, exclude_id: int | None = None) -> list[AvailabilityRecord]:
        with self._lock:
            return [
                r
                for r in self._records.values()
                if r.class_code == class_code and (exclude_id is None or r.id != exclude_id)
            ]

    def replace(
        self,
        record_id: int,
        *,
        teacher: str,
        class_code: str,
        slots: tuple[str, ...],
    ) -> AvailabilityRecord | None:
        with self._lock:
            current = self._records.get(int(record_id))
            if current is None:
                return None
            updated = replace(current, teacher=teacher, class_code=class_code, slots=sort_slots(slots))
            self._records[current.id] = updated
            return updated

    def delete(self, record_id: int) -> bool:
        with self._lock:
            return self._records.pop(int(record_id), None) is not None

    def close(self) -> None:
        pass
