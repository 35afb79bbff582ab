"""File watcher that bumps the reload signal when watched files change."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from pathlib import Path, PurePath
from typing import Iterable

from watchfiles import Change, watch

from browser_reload.core.signal import ReloadSignal

logger = logging.getLogger(__name__)

# Upper bound on how long stop() waits for the watch thread to notice
# its stop event. watchfiles polls the event every few milliseconds.
STOP_TIMEOUT = 5.0


class WatcherState(str, Enum):
    WATCHING = "watching"
    STOPPED = "stopped"


def file_extension(path: str) -> str | None:
    """Return the text after the last ``.`` of the file name, or None."""
    name = PurePath(path).name
    if "." not in name:
        return None
    return name.rsplit(".", 1)[1]


class FileWatcher:
    """Watches directories on a background thread and triggers reloads.

    At most one watch is active per instance; starting again replaces it.
    Only modifications to files whose extension is in the configured set
    count as relevant.
    """

    def __init__(
        self,
        signal: ReloadSignal,
        *,
        debounce_ms: int = 1600,
        force_polling: bool | None = None,
    ) -> None:
        self._signal = signal
        self._debounce_ms = debounce_ms
        self._force_polling = force_polling
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._stop_event: threading.Event | None = None
        self._extensions: frozenset[str] = frozenset()
        self._paths: list[Path] = []

    @property
    def state(self) -> WatcherState:
        thread = self._thread
        if thread is not None and thread.is_alive():
            return WatcherState.WATCHING
        return WatcherState.STOPPED

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    @property
    def extensions(self) -> frozenset[str]:
        return self._extensions

    def start(self, paths: Iterable[str | Path], extensions: Iterable[str]) -> WatcherState:
        """Start watching *paths* recursively for changes to *extensions*.

        An already running watch is stopped first. Raises FileNotFoundError
        if any path does not exist; no watch is running afterwards.
        """
        watch_paths = [Path(p) for p in paths]
        exts = frozenset(ext.lstrip(".") for ext in extensions)

        with self._lock:
            if self._thread is not None:
                logger.info("Stopping existing file watcher")
                self._stop_locked()

            missing = [str(p) for p in watch_paths if not p.exists()]
            if missing:
                raise FileNotFoundError(f"Cannot watch missing path(s): {', '.join(missing)}")
            if not watch_paths:
                raise ValueError("At least one path to watch is required")

            self._extensions = exts
            self._paths = watch_paths
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(watch_paths, stop_event),
                name="browser-reload-watcher",
                daemon=True,
            )
            self._stop_event = stop_event
            self._thread = thread
            thread.start()

        logger.info(
            "File watcher started: paths=%s extensions=%s",
            [str(p) for p in watch_paths],
            ", ".join(sorted(exts)),
        )
        return WatcherState.WATCHING

    def stop(self) -> None:
        """Stop the active watch. Does nothing if none is running."""
        with self._lock:
            if self._thread is None:
                logger.debug("File watcher not running")
                return
            self._stop_locked()
        logger.info("File watcher stopped")

    def _stop_locked(self) -> None:
        assert self._stop_event is not None and self._thread is not None
        self._stop_event.set()
        if self._thread is not threading.current_thread():
            self._thread.join(STOP_TIMEOUT)
        self._thread = None
        self._stop_event = None

    def handle_change(self, change: Change, path: str) -> bool:
        """Trigger a reload if *change* is a relevant modification.

        Returns True when the reload signal was bumped.
        """
        if change != Change.modified:
            return False
        if file_extension(path) not in self._extensions:
            return False
        logger.info("Change detected: %s", path)
        timestamp = self._signal.trigger()
        logger.debug("Reload triggered at %d", timestamp)
        return True

    def _dispatch(self, change: Change, path: str) -> None:
        try:
            self.handle_change(change, path)
        except Exception:
            logger.exception("Failed to handle %s event for %s", change, path)

    def _run(self, paths: list[Path], stop_event: threading.Event) -> None:
        try:
            for changes in watch(
                *paths,
                watch_filter=None,
                debounce=self._debounce_ms,
                stop_event=stop_event,
                force_polling=self._force_polling,
                raise_interrupt=False,
            ):
                for change, path in changes:
                    if stop_event.is_set():
                        return
                    self._dispatch(change, path)
        except Exception:
            logger.exception("File watcher terminated unexpectedly")
