from __future__ import annotations

from .core import (
    TIME_SLOTS,
    AvailabilityError,
    AvailabilityRecord,
    ClassOccupancy,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .core.registry import REGISTRY, AvailabilityRegistry
from .runtime.server import AvailabilityServer, run
from .sdk.client import AvailabilityClient

__all__ = [
    "run",
    "AvailabilityServer",
    "AvailabilityClient",
    "AvailabilityRegistry",
    "REGISTRY",
    "TIME_SLOTS",
    "AvailabilityRecord",
    "ClassOccupancy",
    "AvailabilityError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "StoreError",
]
