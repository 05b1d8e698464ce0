from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _split_origins(raw: str) -> tuple[str, ...]:
    items = tuple(o.strip() for o in raw.split(",") if o.strip())
    return items or ("*",)


@dataclass(frozen=True)
class Settings:
    """Runtime settings, read from `CLASSAVAIL_*` environment variables.

    - CLASSAVAIL_DB: SQLite file path. Empty keeps everything in memory.
    - CLASSAVAIL_URL: running server that `run()` should attach to.
    - CLASSAVAIL_STATIC_DIR: directory with a built frontend (index.html).
    - CLASSAVAIL_LOG_LEVEL: logging level name.
    - CLASSAVAIL_CORS_ORIGINS: comma-separated allowed origins.
    """

    db_path: str | None = None
    server_url: str = ""
    static_dir: str | None = None
    log_level: str = "info"
    cors_origins: tuple[str, ...] = field(default=("*",))

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_path=_env("CLASSAVAIL_DB") or None,
            server_url=_env("CLASSAVAIL_URL"),
            static_dir=_env("CLASSAVAIL_STATIC_DIR") or None,
            log_level=_env("CLASSAVAIL_LOG_LEVEL", "info").lower() or "info",
            cors_origins=_split_origins(_env("CLASSAVAIL_CORS_ORIGINS")),
        )


def configure_logging(level: str = "info") -> None:
    lvl = getattr(logging, str(level).upper(), None)
    if not isinstance(lvl, int):
        raise ValueError(f"Unknown log level: {level!r}")
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("classavail").setLevel(lvl)
