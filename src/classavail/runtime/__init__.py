from __future__ import annotations

from .app import create_app
from .server import AvailabilityServer, run

__all__ = ["create_app", "AvailabilityServer", "run"]
