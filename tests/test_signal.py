"""Tests for ReloadSignal."""

import threading

from browser_reload.core.signal import ReloadSignal, now_ms


def test_initialized_to_clock():
    signal = ReloadSignal(clock=lambda: 42)
    assert signal.current() == 42


def test_default_clock_is_wall_time():
    before = now_ms()
    signal = ReloadSignal()
    after = now_ms()
    assert before <= signal.current() <= after


def test_current_does_not_mutate(signal):
    first = signal.current()
    assert signal.current() == first
    assert signal.current() == first


def test_trigger_returns_new_value(signal):
    previous = signal.current()
    value = signal.trigger()
    assert value > previous
    assert signal.current() == value


def test_trigger_never_goes_backwards():
    ticks = iter([1000, 500])
    signal = ReloadSignal(clock=lambda: next(ticks))
    assert signal.current() == 1000
    assert signal.trigger() == 1000
    assert signal.current() == 1000


def test_concurrent_triggers(signal):
    results = []

    def worker():
        for _ in range(200):
            results.append(signal.trigger())

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 800
    assert signal.current() == max(results)
