"""browser-reload — reload the browser when watched files change."""

from browser_reload.core.config import ReloadConfig, is_dev_mode
from browser_reload.core.reloader import BrowserReload
from browser_reload.core.signal import ReloadSignal
from browser_reload.server.middleware import ReloadScriptMiddleware
from browser_reload.server.routes import build_reload_router, reload_check_response
from browser_reload.server.watcher import FileWatcher, WatcherState

__all__ = [
    "BrowserReload",
    "ReloadConfig",
    "ReloadSignal",
    "ReloadScriptMiddleware",
    "FileWatcher",
    "WatcherState",
    "build_reload_router",
    "reload_check_response",
    "is_dev_mode",
]
