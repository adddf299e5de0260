"""Tests for timer scheduling and deadline scopes."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import pytest

from timeout_helper.timing.deadline import TimeoutHelper
from timeout_helper.timing.errors import DeadlineExceededError
from timeout_helper.timing.timers import threading_scheduler, timeout_scope


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


def test_threading_scheduler_fires_once_with_state() -> None:
    fired = threading.Event()
    seen: list[object] = []

    def callback(state: object) -> None:
        seen.append(state)
        fired.set()

    timer = threading_scheduler(10, callback, "payload")
    assert timer.daemon
    assert fired.wait(2.0)
    timer.join(2.0)
    assert seen == ["payload"]


def test_threading_scheduler_rejects_negative_delay() -> None:
    with pytest.raises(ValueError):
        threading_scheduler(-1, lambda state: None, None)


def test_set_timer_uses_threading_scheduler_by_default() -> None:
    fired = threading.Event()
    helper = TimeoutHelper(timedelta(milliseconds=10))
    timer = helper.set_timer(lambda state: fired.set())
    assert isinstance(timer, threading.Timer)
    assert fired.wait(2.0)


def test_timeout_scope_passes_within_deadline() -> None:
    clock = FakeClock()
    with timeout_scope(timedelta(seconds=5), clock=clock) as helper:
        clock.now += timedelta(seconds=4)
        assert helper.remaining_time() == timedelta(seconds=1)


def test_timeout_scope_raises_when_exceeded() -> None:
    clock = FakeClock()
    with pytest.raises(DeadlineExceededError) as excinfo:
        with timeout_scope(timedelta(seconds=5), clock=clock):
            clock.now += timedelta(seconds=6)
    assert excinfo.value.timeout == timedelta(seconds=5)
    assert isinstance(excinfo.value, TimeoutError)


def test_timeout_scope_propagates_block_errors() -> None:
    clock = FakeClock()
    with pytest.raises(KeyError):
        with timeout_scope(timedelta(seconds=5), clock=clock):
            clock.now += timedelta(seconds=6)
            raise KeyError("inner")


def test_timeout_scope_defaults_to_configured_timeout() -> None:
    with timeout_scope(clock=FakeClock()) as helper:
        assert helper.original_timeout == timedelta(minutes=2)
