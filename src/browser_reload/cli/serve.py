"""browser-reload serve — static dev server with live reload."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from browser_reload.cli import ui


def serve(
    project_dir: Path = typer.Argument(Path("."), help="Project directory (holds browser-reload.config.yaml)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default: server.port)"),
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to (default: server.host)"),
    root: Optional[str] = typer.Option(None, "--root", "-r", help="Directory to serve, relative to the project"),
    watch_paths: Optional[List[str]] = typer.Option(None, "--watch", "-w", help="Path to watch (repeatable)"),
    extensions: Optional[List[str]] = typer.Option(None, "--ext", "-e", help="File extension to watch (repeatable)"),
    no_watch: bool = typer.Option(False, "--no-watch", help="Serve without starting the file watcher"),
    log_level: str = typer.Option("info", "--log-level", help="Log level"),
) -> None:
    """Serve a directory and reload the browser when watched files change."""
    from dotenv import load_dotenv

    from browser_reload.core.config import ReloadConfig
    from browser_reload.core.reloader import BrowserReload
    from browser_reload.server.app import create_app, run_server

    project_dir = project_dir.resolve()
    if not project_dir.is_dir():
        ui.error(f"Not a directory: {project_dir}")
        raise typer.Exit(1)

    load_dotenv(project_dir / ".env")

    config = ReloadConfig.load(project_dir)
    if port is not None:
        config.server.port = port
    if host is not None:
        config.server.host = host
    if root is not None:
        config.server.root = root
    if watch_paths:
        config.watch.paths = list(watch_paths)
    if extensions:
        config.watch.extensions = [ext.lstrip(".") for ext in extensions]

    reload = BrowserReload(config, project_dir=project_dir)

    if not no_watch:
        # Fail before binding the port if a watch path is wrong.
        missing = [str(p) for p in config.resolve_paths(project_dir) if not p.exists()]
        if missing:
            ui.error(f"Cannot watch missing path(s): {', '.join(missing)}")
            raise typer.Exit(1)

    ui.setup_logging(log_level)
    ui.header("Browser Reload")
    ui.url("Serving", f"http://{config.server.host}:{config.server.port}")
    ui.kv("Root", str(project_dir / config.server.root))
    ui.kv("Endpoint", config.endpoint.path)
    if no_watch:
        ui.info("File watcher disabled")
    else:
        ui.kv("Watching", ", ".join(config.watch.paths))
        ui.kv("Extensions", ", ".join(sorted(config.watch.extensions)))
    ui.plain()

    app = create_app(project_dir, config, reload, watch=not no_watch)
    run_server(app, host=config.server.host, port=config.server.port, log_level=log_level)
