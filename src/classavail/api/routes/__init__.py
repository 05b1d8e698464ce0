from __future__ import annotations

from .availabilities import mount_availability_api

__all__ = ["mount_availability_api"]
