"""Saturating arithmetic on tick counts.

A tick is one microsecond, the resolution of :class:`datetime.timedelta`.
The exact bounds ``MAX_TICKS`` and ``MIN_TICKS`` mirror ``timedelta.max`` and
``timedelta.min`` and are reserved for the infinite sentinels: ordinary sums
that overflow saturate one tick inside the bounds so they stay
distinguishable from the sentinels.
"""

from __future__ import annotations

from datetime import timedelta

from timeout_helper.telemetry.logger import get_logger

from .errors import TickOverflowError

__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "MAX_TICKS",
    "MIN_TICKS",
    "TICKS_PER_MILLISECOND",
    "add",
    "from_milliseconds",
    "from_timedelta",
    "to_milliseconds",
    "to_timedelta",
]

TICKS_PER_MILLISECOND = 1000
TICKS_PER_SECOND = 1000 * TICKS_PER_MILLISECOND
TICKS_PER_DAY = 86_400 * TICKS_PER_SECOND

INT32_MAX = 2**31 - 1
INT32_MIN = -(2**31)

_LOGGER = get_logger("timing.ticks")


def from_timedelta(duration: timedelta) -> int:
    return duration.days * TICKS_PER_DAY + duration.seconds * TICKS_PER_SECOND + duration.microseconds


MAX_TICKS = from_timedelta(timedelta.max)
MIN_TICKS = from_timedelta(timedelta.min)


def to_timedelta(ticks: int) -> timedelta:
    if ticks > MAX_TICKS or ticks < MIN_TICKS:
        raise TickOverflowError(ticks=ticks, target="timedelta")
    return timedelta(microseconds=ticks)


def from_milliseconds(milliseconds: int) -> int:
    return milliseconds * TICKS_PER_MILLISECOND


def to_milliseconds(ticks: int) -> int:
    """Convert ``ticks`` to whole milliseconds, truncating toward zero.

    Raises :class:`TickOverflowError` when the result does not fit a signed
    32-bit integer. This conversion never clamps; callers that need capping
    must compare against :data:`INT32_MAX` first.
    """

    milliseconds = abs(ticks) // TICKS_PER_MILLISECOND
    if ticks < 0:
        milliseconds = -milliseconds
    if milliseconds > INT32_MAX or milliseconds < INT32_MIN:
        raise TickOverflowError(ticks=ticks, target="a 32-bit millisecond count")
    return milliseconds


def add(first: int, second: int) -> int:
    """Add two tick counts, saturating instead of overflowing.

    A sentinel operand (``MAX_TICKS`` or ``MIN_TICKS``) is returned unchanged.
    Sums past the bounds clamp to ``MAX_TICKS - 1`` or ``MIN_TICKS + 1``.
    """

    if first == MAX_TICKS or first == MIN_TICKS:
        return first
    if second == MAX_TICKS or second == MIN_TICKS:
        return second
    if first >= 0 and MAX_TICKS - first <= second:
        _LOGGER.debug("tick addition saturated at maximum: %d + %d", first, second)
        return MAX_TICKS - 1
    if first <= 0 and MIN_TICKS - first >= second:
        _LOGGER.debug("tick addition saturated at minimum: %d + %d", first, second)
        return MIN_TICKS + 1
    return first + second
