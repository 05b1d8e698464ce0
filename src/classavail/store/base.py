from __future__ import annotations

from typing import Protocol

from ..core.records import AvailabilityRecord


class AvailabilityStore(Protocol):
    """Keyed record storage used by the registry.

    Stores assign `id` and `created_at`, keep slots in canonical order and do
    no validation or conflict checking of their own.
    """

    def insert(self, *, teacher: str, class_code: str, slots: tuple[str, ...]) -> AvailabilityRecord: ...

    def get(self, record_id: int) -> AvailabilityRecord | None: ...

    def list_all(self) -> list[AvailabilityRecord]: ...

    def list_by_class(self, class_code: str, *, exclude_id: int | None = None) -> list[AvailabilityRecord]: ...

    def replace(
        self,
        record_id: int,
        *,
        teacher: str,
        class_code: str,
        slots: tuple[str, ...],
    ) -> AvailabilityRecord | None: ...

    def delete(self, record_id: int) -> bool: ...

    def close(self) -> None: ...


def newest_first(records: list[AvailabilityRecord]) -> list[AvailabilityRecord]:
    return sorted(records, key=lambda r: (r.created_at, r.id), reverse=True)
