from __future__ import annotations

import logging

from fastapi import FastAPI

from ..api import create_api_app
from ..config import Settings
from ..core.registry import AvailabilityRegistry
from .web import mount_frontend

logger = logging.getLogger(__name__)


def create_app(
    registry: AvailabilityRegistry | None = None,
    *,
    settings: Settings | None = None,
) -> FastAPI:
    """Create the full app: API + (optional) static frontend."""

    settings = settings or Settings.from_env()
    app = create_api_app(registry, settings=settings)

    # API-only still works when no frontend directory is configured.
    if settings.static_dir:
        try:
            mount_frontend(app, settings.static_dir)
        except FileNotFoundError as ex:
            logger.warning("Static frontend not mounted, missing %s", ex)

    return app
