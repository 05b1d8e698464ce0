from __future__ import annotations

import argparse
import dataclasses
import time

from .config import Settings, configure_logging
from .core.registry import AvailabilityRegistry
from .runtime.server import run
from .store import open_store


def main() -> None:
    settings = Settings.from_env()

    p = argparse.ArgumentParser(prog="classavail", description="classavail: class slot availability service")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=3000)
    p.add_argument("--db", default=settings.db_path, help="SQLite file (default: in-memory)")
    p.add_argument("--static-dir", default=settings.static_dir, help="Directory with a built frontend")
    p.add_argument("--log-level", default=settings.log_level)
    args = p.parse_args()

    settings = dataclasses.replace(
        settings,
        db_path=args.db,
        static_dir=args.static_dir,
        log_level=args.log_level,
    )
    configure_logging(settings.log_level)

    registry = AvailabilityRegistry(open_store(settings.db_path))
    srv = run(host=args.host, port=args.port, registry=registry, settings=settings, new_server=True)
    print(srv.url)

    # Block forever (so it behaves like a normal CLI server)
    try:
        while True:
            time.sleep(3600)
    except KeyboardInterrupt:
        pass
    finally:
        registry.close()


if __name__ == "__main__":
    main()
