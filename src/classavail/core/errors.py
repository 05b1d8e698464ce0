"""Domain errors raised by the availability registry.

The API layer turns each class into an HTTP status; the SDK client turns the
error payload back into the same class using `code`.
"""

from __future__ import annotations

from typing import Any


class AvailabilityError(Exception):
    """Base class for every error the registry reports to its caller."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def code(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code, "details": self.details}


class ValidationError(AvailabilityError):
    """Malformed or missing input. The caller should correct the request."""

    status_code = 400


class ConflictError(AvailabilityError):
    """Requested slots overlap slots already held for the same class."""

    status_code = 409

    def __init__(self, slots: tuple[str, ...], conflicting_ids: tuple[int, ...]) -> None:
        self.slots = slots
        self.conflicting_ids = conflicting_ids
        super().__init__(
            f"Selected slot(s) already booked: {', '.join(slots)}",
            details={"slots": list(slots), "conflictingIds": list(conflicting_ids)},
        )


class NotFoundError(AvailabilityError):
    status_code = 404

    def __init__(self, record_id: int) -> None:
        self.record_id = record_id
        super().__init__(f"Availability {record_id} not found", details={"id": record_id})


class StoreError(AvailabilityError):
    """The persistence layer failed. Not caused by the request."""

    status_code = 500


ERRORS_BY_CODE: dict[str, type[AvailabilityError]] = {
    cls.__name__: cls for cls in (ValidationError, ConflictError, NotFoundError, StoreError)
}
