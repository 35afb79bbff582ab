import itertools

import pytest

from browser_reload.core.signal import ReloadSignal


class StepClock:
    """Deterministic millisecond clock that advances on every call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1) -> None:
        self._counter = itertools.count(start, step)

    def __call__(self) -> int:
        return next(self._counter)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def signal(clock):
    return ReloadSignal(clock=clock)
