"""Browser auto-reload for development.

Watches files for changes and refreshes connected browsers. A page served
through ``ReloadScriptMiddleware`` polls the reload-check endpoint once a
second and reloads when the timestamp it gets back differs from the one it
was rendered with.

Usage with FastAPI:

    reload = BrowserReload(ReloadConfig.load("."))
    app = FastAPI(lifespan=reload.lifespan)
    reload.install(app)

From a console, ``reload.trigger_reload()`` forces every open page to
refresh without touching a file.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Iterable

from fastapi import APIRouter, FastAPI

from browser_reload.core.config import ReloadConfig
from browser_reload.core.signal import ReloadSignal
from browser_reload.server.middleware import ReloadScriptMiddleware
from browser_reload.server.routes import build_reload_router
from browser_reload.server.watcher import FileWatcher, WatcherState

logger = logging.getLogger(__name__)


class BrowserReload:
    """Owns the reload signal and the file watcher for one server."""

    def __init__(
        self,
        config: ReloadConfig | None = None,
        *,
        project_dir: str | Path = ".",
        signal: ReloadSignal | None = None,
    ) -> None:
        self.config = config or ReloadConfig()
        self.project_dir = Path(project_dir)
        self.signal = signal or ReloadSignal()
        self.watcher = FileWatcher(
            self.signal,
            debounce_ms=self.config.watch.debounce_ms,
            force_polling=self.config.watch.force_polling,
        )

    def current(self) -> int:
        return self.signal.current()

    def trigger_reload(self) -> int:
        """Force connected browsers to reload. Returns the new timestamp."""
        timestamp = self.signal.trigger()
        logger.info("Browser reload triggered: %d", timestamp)
        return timestamp

    def start_file_watcher(
        self,
        paths: Iterable[str | Path] | None = None,
        extensions: Iterable[str] | None = None,
    ) -> WatcherState:
        """Start watching; omitted arguments come from the config.

        Relative config paths are resolved against the project directory.
        """
        if paths is None:
            paths = self.config.resolve_paths(self.project_dir)
        if extensions is None:
            extensions = self.config.watch.extensions
        return self.watcher.start(paths, extensions)

    def stop_file_watcher(self) -> None:
        self.watcher.stop()

    def router(self) -> APIRouter:
        return build_reload_router(self.signal, self.config.endpoint.path)

    def install(self, app: FastAPI) -> None:
        """Add the reload-check route and the injection middleware to *app*."""
        endpoint = self.config.endpoint
        app.include_router(self.router())
        app.add_middleware(
            ReloadScriptMiddleware,
            signal=self.signal,
            check_path=endpoint.path,
            interval_ms=endpoint.interval_ms,
            inject_when_content_type_missing=endpoint.inject_when_content_type_missing,
        )

    @asynccontextmanager
    async def lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        """Run the file watcher for as long as the server is up."""
        self.start_file_watcher()
        try:
            yield
        finally:
            self.stop_file_watcher()
