from __future__ import annotations

from typing import Any

from ...core.errors import ValidationError


def parse_record_id(value: Any) -> int:
    s = str(value).strip()
    # isdigit() alone admits characters like "²" that int() rejects.
    if not (s.isascii() and s.isdigit()) or int(s) <= 0:
        raise ValidationError("Invalid id", details={"field": "id"})
    return int(s)


def parse_record_body(body: dict[str, Any]) -> tuple[Any, Any, Any]:
    """Pull (teacher, classCode, slots) out of a create/update payload.

    `class_code` is accepted as an alias of `classCode`. Field contents are
    validated by the registry, not here.
    """

    if not isinstance(body, dict):
        raise ValidationError("Invalid payload")
    class_code = body.get("classCode")
    if class_code is None:
        class_code = body.get("class_code")
    return body.get("teacher"), class_code, body.get("slots")
