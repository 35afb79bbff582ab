"""Tests for the BrowserReload facade."""

import pytest
from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from httpx import ASGITransport, AsyncClient

from browser_reload.core.config import ReloadConfig
from browser_reload.core.reloader import BrowserReload
from browser_reload.server.watcher import WatcherState


def test_trigger_reload(signal):
    reload = BrowserReload(signal=signal)
    before = reload.current()
    value = reload.trigger_reload()
    assert value > before
    assert reload.current() == value


def test_start_uses_config_defaults(tmp_path):
    (tmp_path / "assets").mkdir()
    config = ReloadConfig()
    config.watch.paths = ["assets"]
    config.watch.extensions = ["scss"]
    reload = BrowserReload(config, project_dir=tmp_path)
    try:
        assert reload.start_file_watcher() == WatcherState.WATCHING
        assert reload.watcher.paths == [(tmp_path / "assets").resolve()]
        assert reload.watcher.extensions == frozenset({"scss"})
    finally:
        reload.stop_file_watcher()
    assert reload.watcher.state == WatcherState.STOPPED


def test_start_explicit_arguments(tmp_path):
    reload = BrowserReload(project_dir="/does/not/matter")
    try:
        reload.start_file_watcher([tmp_path], ["clj", "css"])
        assert reload.watcher.extensions == frozenset({"clj", "css"})
    finally:
        reload.stop_file_watcher()


def test_start_missing_default_path(tmp_path):
    reload = BrowserReload(project_dir=tmp_path)
    with pytest.raises(FileNotFoundError):
        reload.start_file_watcher()
    assert reload.watcher.state == WatcherState.STOPPED


def test_stop_when_not_running():
    reload = BrowserReload()
    reload.stop_file_watcher()
    assert reload.watcher.state == WatcherState.STOPPED


def test_instances_are_independent(signal):
    first = BrowserReload(signal=signal)
    second = BrowserReload()
    value = second.trigger_reload()
    assert first.signal is not second.signal
    assert second.current() == value


@pytest.mark.asyncio
async def test_install_on_existing_app(signal):
    config = ReloadConfig()
    config.endpoint.path = "/__reload"
    reload = BrowserReload(config, signal=signal)

    app = FastAPI()

    @app.get("/")
    async def index():
        return HTMLResponse("<html><body>hi</body></html>")

    reload.install(app)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        check = await client.get("/__reload")
        assert check.text == str(signal.current())

        page = await client.get("/")
        assert 'fetch("/__reload"' in page.text
        assert f"let lastReloadTime = {signal.current()};" in page.text


@pytest.mark.asyncio
async def test_lifespan(tmp_path):
    config = ReloadConfig()
    config.watch.paths = ["."]
    reload = BrowserReload(config, project_dir=tmp_path)
    app = FastAPI(lifespan=reload.lifespan)

    async with app.router.lifespan_context(app):
        assert reload.watcher.state == WatcherState.WATCHING
    assert reload.watcher.state == WatcherState.STOPPED
