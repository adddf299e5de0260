"""Public entry points for deadline tracking and bounded waits."""

from timeout_helper.timing.deadline import (
    INFINITE,
    INFINITE_TIMEOUT_MS,
    MAX_INSTANT,
    MIN_INSTANT,
    TimeoutHelper,
    add_durations,
    add_instant,
    divide_duration,
    from_milliseconds_timeout,
    subtract_instant,
    to_milliseconds_timeout,
    utc_now,
)
from timeout_helper.timing.errors import (
    DeadlineExceededError,
    TickOverflowError,
    TimeoutArgumentError,
    TimeoutHelperError,
)
from timeout_helper.timing.timers import threading_scheduler, timeout_scope
from timeout_helper.timing.waiting import MAX_WAIT, EventWaitHandle, WaitHandle, wait_one

__all__ = [
    "DeadlineExceededError",
    "EventWaitHandle",
    "INFINITE",
    "INFINITE_TIMEOUT_MS",
    "MAX_INSTANT",
    "MAX_WAIT",
    "MIN_INSTANT",
    "TickOverflowError",
    "TimeoutArgumentError",
    "TimeoutHelper",
    "TimeoutHelperError",
    "WaitHandle",
    "add_durations",
    "add_instant",
    "divide_duration",
    "from_milliseconds_timeout",
    "subtract_instant",
    "threading_scheduler",
    "timeout_scope",
    "to_milliseconds_timeout",
    "utc_now",
    "wait_one",
]
