from __future__ import annotations

from .records import occupancy_to_item, record_to_item

__all__ = ["record_to_item", "occupancy_to_item"]
