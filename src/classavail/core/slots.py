from __future__ import annotations

from typing import Any, Iterable

from .errors import ValidationError


# One-hour ranges offered to teachers, in display order.
TIME_SLOTS: tuple[str, ...] = (
    "08:00-09:00",
    "09:00-10:00",
    "10:00-11:00",
    "11:00-12:00",
    "12:00-13:00",
    "13:00-14:00",
    "14:00-15:00",
    "15:00-16:00",
    "16:00-17:00",
)

_SLOT_ORDER: dict[str, int] = {s: i for i, s in enumerate(TIME_SLOTS)}


def sort_slots(slots: Iterable[str]) -> tuple[str, ...]:
    """Return unique labels in enumeration order (unknown labels last, alphabetically)."""
    unique = set(slots)
    return tuple(sorted(unique, key=lambda s: (_SLOT_ORDER.get(s, len(_SLOT_ORDER)), s)))


def normalize_slots(values: Any) -> tuple[str, ...]:
    """Validate a requested slot selection and return it in canonical form.

    Accepts any list/tuple/set of labels. Labels are stripped, duplicates are
    collapsed, and the result follows `TIME_SLOTS` order.
    """

    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple, set, frozenset)):
        raise ValidationError("slots must be a list of slot labels", details={"field": "slots"})

    cleaned: list[str] = []
    for v in values:
        if not isinstance(v, str):
            raise ValidationError("slot labels must be strings", details={"field": "slots"})
        cleaned.append(v.strip())

    if not cleaned:
        raise ValidationError("Select at least one slot", details={"field": "slots"})

    unknown = sorted({s for s in cleaned if s not in _SLOT_ORDER})
    if unknown:
        raise ValidationError(
            f"Unknown slot(s): {', '.join(unknown)}",
            details={"field": "slots", "unknown": unknown},
        )

    return sort_slots(cleaned)


def free_slots(occupied: Iterable[str]) -> tuple[str, ...]:
    taken = set(occupied)
    return tuple(s for s in TIME_SLOTS if s not in taken)
