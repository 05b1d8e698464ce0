from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import Settings
from ..core.errors import AvailabilityError, StoreError, ValidationError
from ..core.registry import REGISTRY, AvailabilityRegistry
from .routes import mount_availability_api

logger = logging.getLogger(__name__)


def create_api_app(
    registry: AvailabilityRegistry | None = None,
    *,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    registry = registry if registry is not None else REGISTRY

    app = FastAPI(title="classavail", version="0.1.0")
    app.state.registry = registry

    origins = list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed requests against a wildcard origin.
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AvailabilityError)
    def _availability_error(request: Request, exc: AvailabilityError) -> JSONResponse:
        if isinstance(exc, StoreError):
            logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": "DB error", "code": exc.code, "details": {}},
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Unparseable JSON and other framework-level input errors share the 400 contract.
        err = ValidationError("Invalid payload", details={"errors": jsonable_encoder(exc.errors())})
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    mount_availability_api(app, registry)

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    return app
