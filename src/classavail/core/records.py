from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, kw_only=True)
class AvailabilityRecord:
    """One teacher's slot selection for one class.

    Notes:
    - `slots` is kept in enumeration order without duplicates; compare it as a set.
    - `id` and `created_at` are assigned by the store and never change.
    """

    id: int
    teacher: str
    class_code: str
    slots: tuple[str, ...]
    created_at: datetime

    def overlap(self, slots: frozenset[str] | set[str]) -> set[str]:
        return set(self.slots) & set(slots)


@dataclass(frozen=True)
class ClassOccupancy:
    class_code: str
    occupied: dict[str, str]  # slot -> teacher
    free: tuple[str, ...]
