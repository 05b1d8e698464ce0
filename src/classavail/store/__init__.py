from __future__ import annotations

from .base import AvailabilityStore
from .memory import InMemoryStore
from .sqlite import SqliteStore

__all__ = ["AvailabilityStore", "InMemoryStore", "SqliteStore", "open_store"]


def open_store(db_path: str | None) -> AvailabilityStore:
    """SQLite store when a path is given, otherwise an in-memory store."""
    if db_path:
        return SqliteStore(db_path)
    return InMemoryStore()
