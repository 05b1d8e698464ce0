from __future__ import annotations

import contextlib
import logging
import socket
import threading
import time
from dataclasses import dataclass, field
from typing import Any

import uvicorn

from ..config import Settings
from ..core.records import AvailabilityRecord, ClassOccupancy
from ..core.registry import REGISTRY, AvailabilityRegistry
from ..sdk.client import AvailabilityClient
from ..store import open_store
from .app import create_app

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailabilityServer:
    host: str
    port: int
    url: str
    registry: AvailabilityRegistry = field(repr=False)
    _server: uvicorn.Server = field(repr=False, compare=False)
    _thread: threading.Thread = field(repr=False, compare=False)

    @property
    def base_url(self) -> str:
        return self.url.rstrip("/")

    def client(self) -> AvailabilityClient:
        return AvailabilityClient(self.base_url)

    # In-process shortcuts, same semantics as the HTTP endpoints.

    def list_all(self) -> list[AvailabilityRecord]:
        return self.registry.list_all()

    def create(self, teacher: str, class_code: str, slots: Any) -> AvailabilityRecord:
        return self.registry.create(teacher, class_code, slots)

    def update(self, record_id: int, teacher: str, class_code: str, slots: Any) -> AvailabilityRecord:
        return self.registry.update(record_id, teacher, class_code, slots)

    def delete(self, record_id: int) -> None:
        self.registry.delete(record_id)

    def occupancy(self, class_code: str) -> ClassOccupancy:
        return self.registry.occupancy(class_code)

    def stop(self, *, timeout_s: float = 5.0) -> None:
        self._server.should_exit = True
        self._thread.join(timeout=timeout_s)


def _find_free_port(host: str) -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _normalize_base_url(url: str) -> str:
    url = url.strip()
    if not url:
        return ""
    # Allow passing just host:port.
    if "://" not in url:
        url = "http://" + url
    return url.rstrip("/")


def run(
    *,
    host: str = "127.0.0.1",
    port: int = 0,
    registry: AvailabilityRegistry | None = None,
    settings: Settings | None = None,
    log_level: str | None = None,
    access_log: bool = True,
    new_server: bool = False,
    connect_timeout_s: float = 0.2,
    startup_timeout_s: float = 5.0,
) -> AvailabilityServer | AvailabilityClient:
    """Start the availability service with a single Python call.

    Behavior:
    - If CLASSAVAIL_URL is set, attach to that server (client mode) unless
      `new_server=True`.
    - Otherwise, if `port != 0` and a server already answers at
      http://{host}:{port}, attach to it unless `new_server=True`.
    - Otherwise start uvicorn in a daemon thread and return an `AvailabilityServer`.

    `port=0` picks a free port, so there is nothing to attach to. Without an
    explicit `registry`, a new server uses CLASSAVAIL_DB when set and the
    in-memory `REGISTRY` otherwise.
    """

    settings = settings or Settings.from_env()

    env_url = _normalize_base_url(settings.server_url)
    if env_url and not new_server:
        client = AvailabilityClient(env_url, timeout_s=connect_timeout_s)
        if client.healthy():
            logger.info("Attached to existing server at %s", env_url)
            return AvailabilityClient(env_url)

    if port != 0 and not new_server:
        default_url = _normalize_base_url(f"http://{host}:{port}")
        client = AvailabilityClient(default_url, timeout_s=connect_timeout_s)
        if client.healthy():
            logger.info("Attached to existing server at %s", default_url)
            return AvailabilityClient(default_url)

    if port == 0:
        port = _find_free_port(host)

    if registry is None:
        registry = AvailabilityRegistry(open_store(settings.db_path)) if settings.db_path else REGISTRY
    app = create_app(registry, settings=settings)

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=log_level or settings.log_level,
        access_log=access_log,
    )
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    # Wait for the socket so a follow-up client call doesn't race startup.
    deadline = time.monotonic() + startup_timeout_s
    while not server.started and thread.is_alive() and time.monotonic() < deadline:
        time.sleep(0.01)
    if not server.started:
        raise RuntimeError(f"Server failed to start on {host}:{port}")

    url = f"http://{host}:{port}/"
    logger.info("Server running on %s", url)
    return AvailabilityServer(
        host=host,
        port=port,
        url=url,
        registry=registry,
        _server=server,
        _thread=thread,
    )
