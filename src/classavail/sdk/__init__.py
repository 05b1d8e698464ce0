from __future__ import annotations

from .client import AvailabilityClient, record_from_item

__all__ = ["AvailabilityClient", "record_from_item"]
