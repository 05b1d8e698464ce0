from __future__ import annotations

from .service import REGISTRY, AvailabilityRegistry

__all__ = ["AvailabilityRegistry", "REGISTRY"]
