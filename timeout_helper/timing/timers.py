"""Timer scheduling and deadline scopes."""

from __future__ import annotations

import contextlib
import threading
from datetime import timedelta
from typing import Any, Callable, Iterator, Protocol

from timeout_helper.telemetry.logger import get_logger

from .deadline import Clock, TimeoutHelper, utc_now
from .errors import DeadlineExceededError

__all__ = ["TimerScheduler", "threading_scheduler", "timeout_scope"]

_LOGGER = get_logger("timing.timers")


class TimerScheduler(Protocol):
    def __call__(self, delay_ms: int, callback: Callable[[Any], None], state: Any) -> Any:
        ...


def threading_scheduler(delay_ms: int, callback: Callable[[Any], None], state: Any) -> threading.Timer:
    """Start a daemon :class:`threading.Timer` that calls ``callback(state)`` once."""

    if delay_ms < 0:
        raise ValueError(f"delay_ms must be non-negative: {delay_ms}")
    timer = threading.Timer(delay_ms / 1000.0, callback, args=(state,))
    timer.daemon = True
    timer.start()
    return timer


@contextlib.contextmanager
def timeout_scope(timeout: timedelta | None = None, *, clock: Clock = utc_now) -> Iterator[TimeoutHelper]:
    """Yield a :class:`TimeoutHelper` and raise if the block outlives it.

    ``None`` uses the configured default timeout. Exceptions raised inside the
    block propagate unchanged.
    """

    helper = TimeoutHelper.default(clock=clock) if timeout is None else TimeoutHelper(timeout, clock=clock)
    yield helper
    if helper.is_expired():
        _LOGGER.warning("deadline exceeded: timeout=%s", helper.original_timeout)
        raise DeadlineExceededError(timeout=helper.original_timeout)
