"""Deadline tracking and saturating conversions between timeout representations.

Durations are :class:`datetime.timedelta` values and instants are UTC-aware
:class:`datetime.datetime` values. ``timedelta.max`` doubles as the
"infinite" timeout and ``datetime.max`` (UTC) as the "no deadline" instant;
every helper here short-circuits on those sentinels before doing arithmetic.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from timeout_helper.telemetry.logger import get_logger
from timeout_helper.utils.config import default_timeouts

from . import ticks
from .errors import TimeoutArgumentError

__all__ = [
    "INFINITE",
    "INFINITE_TIMEOUT_MS",
    "MAX_INSTANT",
    "MIN_INSTANT",
    "Clock",
    "TimeoutHelper",
    "add_durations",
    "add_instant",
    "divide_duration",
    "from_milliseconds_timeout",
    "subtract_instant",
    "to_milliseconds_timeout",
    "utc_now",
]

Clock = Callable[[], datetime]

INFINITE = timedelta.max
INFINITE_TIMEOUT_MS = -1
MAX_INSTANT = datetime.max.replace(tzinfo=timezone.utc)
MIN_INSTANT = datetime.min.replace(tzinfo=timezone.utc)

_ZERO = timedelta(0)
_LAST_FINITE_INSTANT = MAX_INSTANT - timedelta(microseconds=1)
_LOGGER = get_logger("timing.deadline")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimeoutHelper:
    """Immutable deadline computed once from a timeout and the current time.

    Parameters
    ----------
    timeout:
        Non-negative duration, or :data:`INFINITE` for "no deadline".
    clock:
        Zero-argument callable returning the current UTC instant. Defaults to
        :func:`utc_now`; tests inject a fake clock.

    Raises
    ------
    TimeoutArgumentError
        When ``timeout`` is negative.
    """

    __slots__ = ("_clock", "_deadline", "_original_timeout")

    def __init__(self, timeout: timedelta, *, clock: Clock = utc_now) -> None:
        if not isinstance(timeout, timedelta):
            raise TypeError(f"timeout must be a timedelta, got {type(timeout).__name__}")
        if timeout < _ZERO:
            raise TimeoutArgumentError(
                argument="timeout", value=timeout, reason="cannot be less than zero"
            )
        self._clock = clock
        self._original_timeout = timeout
        if timeout == INFINITE:
            self._deadline = MAX_INSTANT
        else:
            # MAX_INSTANT is reserved for infinite timeouts
            self._deadline = min(add_instant(clock(), timeout), _LAST_FINITE_INSTANT)
        _LOGGER.debug("timeout helper created: timeout=%s deadline=%s", timeout, self._deadline)

    @classmethod
    def default(cls, *, clock: Clock = utc_now) -> "TimeoutHelper":
        """Helper for the configured default timeout (two minutes unless overridden)."""

        return cls(default_timeouts().timeout, clock=clock)

    @classmethod
    def default_short(cls, *, clock: Clock = utc_now) -> "TimeoutHelper":
        """Helper for the configured short timeout (four seconds unless overridden)."""

        return cls(default_timeouts().short_timeout, clock=clock)

    @property
    def original_timeout(self) -> timedelta:
        return self._original_timeout

    @property
    def deadline(self) -> datetime:
        return self._deadline

    def remaining_time(self) -> timedelta:
        """Time left until the deadline.

        Never negative and never more than :attr:`original_timeout`. Only an
        :data:`INFINITE` timeout reports :data:`INFINITE`; a finite timeout
        past the end of the calendar stops one tick short of ``MAX_INSTANT``.
        """

        if self._deadline == MAX_INSTANT:
            return INFINITE
        remaining = self._deadline - self._clock()
        if remaining <= _ZERO:
            return _ZERO
        return remaining

    def is_expired(self) -> bool:
        return self.remaining_time() == _ZERO

    def set_timer(
        self,
        callback: Callable[[Any], None],
        state: Any = None,
        *,
        scheduler: Callable[[int, Callable[[Any], None], Any], Any] | None = None,
    ) -> Any:
        """Invoke ``callback(state)`` once the remaining time has elapsed.

        Returns the scheduler's handle, or ``None`` when the deadline is
        infinite and the callback will never fire.
        """

        delay_ms = to_milliseconds_timeout(self.remaining_time())
        if delay_ms == INFINITE_TIMEOUT_MS:
            _LOGGER.debug("timer not scheduled for infinite deadline")
            return None
        if scheduler is None:
            from .timers import threading_scheduler

            scheduler = threading_scheduler
        _LOGGER.debug("scheduling timer callback in %d ms", delay_ms)
        return scheduler(delay_ms, callback, state)

    def __repr__(self) -> str:
        return f"TimeoutHelper(original_timeout={self._original_timeout!r}, deadline={self._deadline!r})"


def to_milliseconds_timeout(timeout: timedelta) -> int:
    """Convert ``timeout`` to the 32-bit millisecond form used by wait APIs.

    :data:`INFINITE` maps to :data:`INFINITE_TIMEOUT_MS`. Finite values are
    capped at ``INT32_MAX`` and negative values map to zero, so a finite input
    never yields the infinite sentinel.
    """

    if timeout == INFINITE:
        return INFINITE_TIMEOUT_MS
    count = ticks.from_timedelta(timeout)
    if count <= 0:
        return 0
    if count // ticks.TICKS_PER_MILLISECOND > ticks.INT32_MAX:
        return ticks.INT32_MAX
    return ticks.to_milliseconds(count)


def from_milliseconds_timeout(milliseconds: int) -> timedelta:
    if milliseconds == INFINITE_TIMEOUT_MS:
        return INFINITE
    return ticks.to_timedelta(ticks.from_milliseconds(milliseconds))


def add_durations(first: timedelta, second: timedelta) -> timedelta:
    return ticks.to_timedelta(ticks.add(ticks.from_timedelta(first), ticks.from_timedelta(second)))


def add_instant(instant: datetime, timeout: timedelta) -> datetime:
    """Return ``instant + timeout`` clamped to ``[MIN_INSTANT, MAX_INSTANT]``."""

    if timeout >= _ZERO and MAX_INSTANT - instant <= timeout:
        return MAX_INSTANT
    if timeout <= _ZERO and MIN_INSTANT - instant >= timeout:
        return MIN_INSTANT
    return instant + timeout


def subtract_instant(instant: datetime, timeout: timedelta) -> datetime:
    return add_instant(instant, _negate(timeout))


def divide_duration(timeout: timedelta, factor: int) -> timedelta:
    """Divide ``timeout`` by ``factor`` and add one tick.

    The quotient truncates toward zero; the extra tick keeps a divided
    timeout from rounding down to an early expiry. :data:`INFINITE` is
    returned unchanged.
    """

    if timeout == INFINITE:
        return INFINITE
    if factor == 0:
        raise TimeoutArgumentError(argument="factor", value=factor, reason="cannot be zero")
    count = ticks.from_timedelta(timeout)
    quotient = abs(count) // abs(factor)
    if (count < 0) != (factor < 0):
        quotient = -quotient
    # the quotient may land on MIN_TICKS, which ticks.add would treat as a sentinel
    biased = min(max(quotient + 1, ticks.MIN_TICKS + 1), ticks.MAX_TICKS - 1)
    return ticks.to_timedelta(biased)


def _negate(timeout: timedelta) -> timedelta:
    # -timedelta.max is below timedelta.min
    return ticks.to_timedelta(max(-ticks.from_timedelta(timeout), ticks.MIN_TICKS))
