"""SQLite-backed availability store.

Slots are persisted as a JSON array in a TEXT column. Encoding and decoding
happen only here; the rest of the package sees tuples of labels.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path

from ..core.errors import StoreError
from ..core.records import AvailabilityRecord
from ..core.slots import sort_slots

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS availabilities (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    teacher TEXT NOT NULL,
    class_code TEXT NOT NULL,
    slots TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_availabilities_class_code ON availabilities (class_code);
"""

_COLUMNS = "id, teacher, class_code, slots, created_at"

# Largest value an INTEGER PRIMARY KEY can hold; no row has a bigger id.
_MAX_ROWID = 2**63 - 1


def _storable_id(record_id: int) -> bool:
    return 0 < int(record_id) <= _MAX_ROWID


def encode_slots(slots: tuple[str, ...]) -> str:
    return json.dumps(list(slots))


def decode_slots(raw: str) -> tuple[str, ...]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as ex:
        raise StoreError(f"Corrupt slots column: {raw!r}") from ex
    if not isinstance(data, list) or not all(isinstance(s, str) for s in data):
        raise StoreError(f"Corrupt slots column: {raw!r}")
    return sort_slots(data)


def _row_to_record(row: sqlite3.Row) -> AvailabilityRecord:
    created = datetime.fromisoformat(row["created_at"])
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return AvailabilityRecord(
        id=int(row["id"]),
        teacher=row["teacher"],
        class_code=row["class_code"],
        slots=decode_slots(row["slots"]),
        created_at=created,
    )


class SqliteStore:
    def __init__(self, path: str | Path = ":memory:") -> None:
        self.path = str(path)
        self._lock = threading.RLock()
        try:
            self._conn = sqlite3.connect(self.path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            with self._conn:
                self._conn.executescript(_SCHEMA)
        except sqlite3.Error as ex:
            raise StoreError(f"Cannot open database {self.path}: {ex}") from ex
        logger.info("Connected to SQLite DB: %s", self.path)

    def _query(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        with self._lock:
            try:
                return self._conn.execute(sql, params).fetchall()
            except sqlite3.Error as ex:
                raise StoreError(f"DB error: {ex}") from ex

    def _write(self, sql: str, params: tuple) -> sqlite3.Cursor:
        with self._lock:
            try:
                with self._conn:
                    return self._conn.execute(sql, params)
            except sqlite3.Error as ex:
                raise StoreError(f"DB write error: {ex}") from ex

    def insert(self, *, teacher: str, class_code: str, slots: tuple[str, ...]) -> AvailabilityRecord:
        created = datetime.now(timezone.utc)
        with self._lock:
            cur = self._write(
                "INSERT INTO availabilities (teacher, class_code, slots, created_at) VALUES (?, ?, ?, ?)",
                (teacher, class_code, encode_slots(sort_slots(slots)), created.isoformat(timespec="microseconds")),
            )
            new_id = int(cur.lastrowid)
        return AvailabilityRecord(
            id=new_id,
            teacher=teacher,
            class_code=class_code,
            slots=sort_slots(slots),
            created_at=created,
        )

    def get(self, record_id: int) -> AvailabilityRecord | None:
        if not _storable_id(record_id):
            return None
        rows = self._query(f"SELECT {_COLUMNS} FROM availabilities WHERE id = ?", (int(record_id),))
        return _row_to_record(rows[0]) if rows else None

    def list_all(self) -> list[AvailabilityRecord]:
        rows = self._query(f"SELECT {_COLUMNS} FROM availabilities ORDER BY created_at DESC, id DESC")
        return [_row_to_record(r) for r in rows]

    def list_by_class(self, class_code: str, *, exclude_id: int | None = None) -> list[AvailabilityRecord]:
        if exclude_id is None or not _storable_id(exclude_id):
            rows = self._query(f"SELECT {_COLUMNS} FROM availabilities WHERE class_code = ?", (class_code,))
        else:
            rows = self._query(
                f"SELECT {_COLUMNS} FROM availabilities WHERE class_code = ? AND id != ?",
                (class_code, int(exclude_id)),
            )
        return [_row_to_record(r) for r in rows]

    def replace(
        self,
        record_id: int,
        *,
        teacher: str,
        class_code: str,
        slots: tuple[str, ...],
    ) -> AvailabilityRecord | None:
        if not _storable_id(record_id):
            return None
        with self._lock:
            cur = self._write(
                "UPDATE availabilities SET teacher = ?, class_code = ?, slots = ? WHERE id = ?",
                (teacher, class_code, encode_slots(sort_slots(slots)), int(record_id)),
            )
            if cur.rowcount == 0:
                return None
            return self.get(record_id)

    def delete(self, record_id: int) -> bool:
        if not _storable_id(record_id):
            return False
        cur = self._write("DELETE FROM availabilities WHERE id = ?", (int(record_id),))
        return cur.rowcount > 0

    def close(self) -> None:
        with self._lock:
            self._conn.close()
