"""Exception types raised by the timeout helpers."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

__all__ = [
    "DeadlineExceededError",
    "TickOverflowError",
    "TimeoutArgumentError",
    "TimeoutHelperError",
]


class TimeoutHelperError(Exception):
    """Base error emitted by the timeout helpers."""


class TimeoutArgumentError(TimeoutHelperError, ValueError):
    """Raised when a caller passes an unusable timeout argument.

    The offending argument name and value are kept on the exception so the
    caller can report which contract was violated.
    """

    def __init__(self, *, argument: str, value: Any, reason: str) -> None:
        super().__init__(f"{argument} {reason}: {argument}={value!r}")
        self.argument = argument
        self.value = value


class TickOverflowError(TimeoutHelperError, OverflowError):
    """Raised when a tick count does not fit the requested representation."""

    def __init__(self, *, ticks: int, target: str) -> None:
        super().__init__(f"{ticks} ticks cannot be represented as {target}")
        self.ticks = ticks
        self.target = target


class DeadlineExceededError(TimeoutHelperError, TimeoutError):
    """Raised when a :func:`timeout_scope` block runs past its deadline."""

    def __init__(self, *, timeout: timedelta) -> None:
        super().__init__(f"operation did not complete within {timeout}")
        self.timeout = timeout
