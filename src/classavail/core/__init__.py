from __future__ import annotations

from .errors import (
    AvailabilityError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .records import AvailabilityRecord, ClassOccupancy
from .slots import TIME_SLOTS, free_slots, normalize_slots, sort_slots

__all__ = [
    "TIME_SLOTS",
    "normalize_slots",
    "sort_slots",
    "free_slots",
    "AvailabilityRecord",
    "ClassOccupancy",
    "AvailabilityError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "StoreError",
]
