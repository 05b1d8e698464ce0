from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator

from ...store import AvailabilityStore, open_store
from ..errors import ConflictError, NotFoundError, ValidationError
from ..records import AvailabilityRecord, ClassOccupancy
from ..slots import free_slots, normalize_slots, sort_slots

logger = logging.getLogger(__name__)


class AvailabilityRegistry:
    """Create/list/update/delete availability records without double-booking.

    For any class code, the slot sets of its records are pairwise disjoint.
    The registry keeps no copy of the records; every call goes to the store.

    Conflict check and write run under a lock for the target class code, so
    two concurrent requests cannot both claim the same slot. The locks are
    process-local.
    """

    def __init__(self, store: AvailabilityStore | None = None) -> None:
        self._store: AvailabilityStore = store if store is not None else open_store(None)
        self._locks_guard = threading.Lock()
        # class_code -> [lock, number of holders and waiters]; dropped when unused.
        self._class_locks: dict[str, list] = {}

    @property
    def store(self) -> AvailabilityStore:
        return self._store

    @contextmanager
    def _class_lock(self, class_code: str) -> Iterator[None]:
        with self._locks_guard:
            entry = self._class_locks.setdefault(class_code, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._class_locks[class_code]

    @staticmethod
    def _validate_text(value: Any, *, field: str, message: str) -> str:
        if value is None or not isinstance(value, str):
            raise ValidationError(message, details={"field": field})
        v = value.strip()
        if not v:
            raise ValidationError(message, details={"field": field})
        return v

    @staticmethod
    def _validate_id(record_id: Any) -> int:
        if isinstance(record_id, bool):
            raise ValidationError("Invalid id", details={"field": "id"})
        try:
            rid = int(record_id)
        except (TypeError, ValueError) as ex:
            raise ValidationError("Invalid id", details={"field": "id"}) from ex
        if rid <= 0 or (isinstance(record_id, float) and rid != record_id):
            raise ValidationError("Invalid id", details={"field": "id"})
        return rid

    def _validate_fields(self, teacher: Any, class_code: Any, slots: Any) -> tuple[str, str, tuple[str, ...]]:
        t = self._validate_text(teacher, field="teacher", message="Enter teacher name")
        c = self._validate_text(class_code, field="classCode", message="Select a class")
        s = normalize_slots(slots)
        return t, c, s

    def _check_conflicts_locked(
        self,
        class_code: str,
        slots: tuple[str, ...],
        *,
        exclude_id: int | None = None,
    ) -> None:
        requested = frozenset(slots)
        taken: set[str] = set()
        ids: list[int] = []
        for rec in self._store.list_by_class(class_code, exclude_id=exclude_id):
            overlap = rec.overlap(requested)
            if overlap:
                taken |= overlap
                ids.append(rec.id)
        if taken:
            logger.warning(
                "Rejected booking for %s: slot(s) %s held by record(s) %s",
                class_code,
                ", ".join(sort_slots(taken)),
                sorted(ids),
            )
            raise ConflictError(sort_slots(taken), tuple(sorted(ids)))

    def list_all(self) -> list[AvailabilityRecord]:
        """Every record, most recently created first."""
        return self._store.list_all()

    def get(self, record_id: int) -> AvailabilityRecord:
        rid = self._validate_id(record_id)
        rec = self._store.get(rid)
        if rec is None:
            raise NotFoundError(rid)
        return rec

    def create(self, teacher: str, class_code: str, slots: Any) -> AvailabilityRecord:
        t, c, s = self._validate_fields(teacher, class_code, slots)
        with self._class_lock(c):
            self._check_conflicts_locked(c, s)
            rec = self._store.insert(teacher=t, class_code=c, slots=s)
        logger.info("Created availability %d for %s (%s)", rec.id, rec.class_code, ", ".join(rec.slots))
        return rec

    def update(self, record_id: int, teacher: str, class_code: str, slots: Any) -> AvailabilityRecord:
        rid = self._validate_id(record_id)
        t, c, s = self._validate_fields(teacher, class_code, slots)
        with self._class_lock(c):
            if self._store.get(rid) is None:
                raise NotFoundError(rid)
            self._check_conflicts_locked(c, s, exclude_id=rid)
            rec = self._store.replace(rid, teacher=t, class_code=c, slots=s)
        if rec is None:
            # Deleted between the existence check and the write.
            raise NotFoundError(rid)
        logger.info("Updated availability %d for %s (%s)", rec.id, rec.class_code, ", ".join(rec.slots))
        return rec

    def delete(self, record_id: int) -> None:
        rid = self._validate_id(record_id)
        if not self._store.delete(rid):
            raise NotFoundError(rid)
        logger.info("Deleted availability %d", rid)

    def occupancy(self, class_code: str) -> ClassOccupancy:
        """Which slots of a class are taken (and by whom) and which are free."""
        c = self._validate_text(class_code, field="classCode", message="Select a class")
        held: dict[str, str] = {}
        for rec in self._store.list_by_class(c):
            for slot in rec.slots:
                held[slot] = rec.teacher
        occupied = {slot: held[slot] for slot in sort_slots(held)}
        return ClassOccupancy(class_code=c, occupied=occupied, free=free_slots(held))

    def close(self) -> None:
        self._store.close()


# Process default, in memory. `run()` and the CLI open CLASSAVAIL_DB themselves.
REGISTRY = AvailabilityRegistry(open_store(None))
