from __future__ import annotations

from classavail.config import Settings
from classavail.core.registry import AvailabilityRegistry
from classavail.runtime.server import AvailabilityServer, run
from classavail.sdk.client import AvailabilityClient
from classavail.store import InMemoryStore


def test_run_starts_server_and_client_talks_to_it() -> None:
    registry = AvailabilityRegistry(InMemoryStore())
    server = run(port=0, registry=registry, settings=Settings(), access_log=False, new_server=True)
    assert isinstance(server, AvailabilityServer)
    try:
        rec = server.client().create("Alice", "MATH101", ["08:00-09:00"])
        assert [r.id for r in server.list_all()] == [rec.id]
        assert server.registry is registry
    finally:
        server.stop()


def test_run_auto_attaches_to_existing_server() -> None:
    """If a server is reachable at host/port, run() attaches instead of starting another."""

    server = run(port=0, registry=AvailabilityRegistry(InMemoryStore()), settings=Settings(), new_server=True)
    try:
        attached = run(host=server.host, port=server.port, settings=Settings())
        assert isinstance(attached, AvailabilityClient)
        assert attached.base_url == f"http://{server.host}:{server.port}"
    finally:
        server.stop()


def test_run_new_server_ignores_configured_url() -> None:
    s1 = run(port=0, registry=AvailabilityRegistry(InMemoryStore()), settings=Settings(), new_server=True)
    try:
        settings = Settings(server_url=f"{s1.host}:{s1.port}")
        attached = run(settings=settings)
        assert isinstance(attached, AvailabilityClient)

        s2 = run(port=0, registry=AvailabilityRegistry(InMemoryStore()), settings=settings, new_server=True)
        assert isinstance(s2, AvailabilityServer)
        assert (s2.host, s2.port) != (s1.host, s1.port)
        s2.stop()
    finally:
        s1.stop()


def test_run_opens_configured_database(tmp_path) -> None:
    from classavail.store import SqliteStore

    db = tmp_path / "db.sqlite"
    server = run(port=0, settings=Settings(db_path=str(db)), access_log=False, new_server=True)
    try:
        assert isinstance(server.registry.store, SqliteStore)
        server.client().create("Alice", "MATH101", ["08:00-09:00"])
    finally:
        server.stop()
        server.registry.close()

    reopened = SqliteStore(db)
    assert [r.teacher for r in reopened.list_all()] == ["Alice"]
    reopened.close()
