from __future__ import annotations

from .records import parse_record_body, parse_record_id

__all__ = ["parse_record_body", "parse_record_id"]
