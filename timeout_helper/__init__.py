"""Deadline arithmetic, saturating timeout conversions and bounded waits."""

from timeout_helper.timing import (
    INFINITE,
    INFINITE_TIMEOUT_MS,
    DeadlineExceededError,
    EventWaitHandle,
    TickOverflowError,
    TimeoutArgumentError,
    TimeoutHelper,
    from_milliseconds_timeout,
    timeout_scope,
    to_milliseconds_timeout,
    wait_one,
)

__all__ = [
    "DeadlineExceededError",
    "EventWaitHandle",
    "INFINITE",
    "INFINITE_TIMEOUT_MS",
    "TickOverflowError",
    "TimeoutArgumentError",
    "TimeoutHelper",
    "from_milliseconds_timeout",
    "timeout_scope",
    "to_milliseconds_timeout",
    "wait_one",
]

__version__ = "0.1.0"
