"""Shared reload timestamp polled by the browser."""

from __future__ import annotations

import threading
import time
from typing import Callable


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class ReloadSignal:
    """Thread-safe cell holding the time of the last relevant change.

    Written by the file watcher thread (and manual triggers), read by every
    status-endpoint request. The value never moves backwards.
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or now_ms
        self._lock = threading.Lock()
        self._value = self._clock()

    def trigger(self) -> int:
        """Set the value to now and return it."""
        with self._lock:
            self._value = max(self._value, self._clock())
            return self._value

    def current(self) -> int:
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"ReloadSignal({self.current()})"
