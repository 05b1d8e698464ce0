from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles


def mount_frontend(app: FastAPI, static_dir: str | Path) -> None:
    """Serve a prebuilt browser frontend from the same app.

    Files under `static_dir` are served by path; anything else that is not an
    API route falls back to `index.html`.
    """

    root = Path(static_dir).resolve()
    index_path = root / "index.html"
    if not index_path.exists():
        raise FileNotFoundError(str(index_path))

    assets_path = root / "assets"
    if assets_path.is_dir():
        app.mount("/assets", StaticFiles(directory=str(assets_path)), name="assets")

    @app.get("/", include_in_schema=False)
    @app.get("/{path:path}", include_in_schema=False)
    def _spa_index(path: str = "") -> FileResponse:
        if path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")
        candidate = (root / path).resolve()
        if path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(str(candidate))
        return FileResponse(str(index_path))
