"""FastAPI dev server: static files with live reload."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from browser_reload.core.config import ReloadConfig
from browser_reload.core.reloader import BrowserReload

logger = logging.getLogger(__name__)


def create_app(
    project_dir: Path,
    config: ReloadConfig | None = None,
    reload: BrowserReload | None = None,
    *,
    watch: bool = True,
) -> FastAPI:
    """Build the dev server app for *project_dir*.

    Serves ``server.root`` as static files, exposes the reload-check
    endpoint, injects the polling script into HTML pages and, when *watch*
    is set, runs the file watcher for the lifetime of the server.
    """
    project_dir = project_dir.resolve()
    if config is None:
        config = ReloadConfig.load(project_dir)
    if reload is None:
        reload = BrowserReload(config, project_dir=project_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not watch:
            yield
            return
        async with reload.lifespan(app):
            yield

    app = FastAPI(
        title="Browser Reload Dev Server",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.reload = reload
    reload.install(app)

    static_root = project_dir / config.server.root
    if static_root.is_dir():
        app.mount("/", StaticFiles(directory=str(static_root), html=True), name="static")
    else:
        logger.warning("Static root %s not found; serving the reload endpoint only", static_root)

    return app


def run_server(app: FastAPI, host: str = "127.0.0.1", port: int = 8000, log_level: str = "info") -> None:
    uvicorn.run(app, host=host, port=port, log_level=log_level)
