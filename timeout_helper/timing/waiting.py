"""Bounded waits on handles that only accept 32-bit millisecond timeouts."""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol, runtime_checkable

from timeout_helper.telemetry.logger import get_logger

from . import ticks
from .deadline import INFINITE, INFINITE_TIMEOUT_MS, to_milliseconds_timeout

__all__ = ["MAX_WAIT", "EventWaitHandle", "Waitable", "WaitHandle", "wait_one"]

MAX_WAIT = timedelta(milliseconds=ticks.INT32_MAX)

_LOGGER = get_logger("timing.waiting")


@runtime_checkable
class WaitHandle(Protocol):
    """Blocking primitive that waits at most ``timeout_ms`` milliseconds.

    ``timeout_ms == -1`` blocks until signalled. ``exit_context`` is a
    handle-specific option passed through untouched by :func:`wait_one`.
    """

    def wait_one(self, timeout_ms: int = INFINITE_TIMEOUT_MS, exit_context: bool = False) -> bool:
        ...


class Waitable(Protocol):
    def wait(self, timeout: float | None = None) -> bool:
        ...


class EventWaitHandle:
    """Adapt a ``wait(timeout_seconds)`` object such as :class:`threading.Event`.

    CPython primitives have no synchronisation context to leave while
    blocked, so ``exit_context`` is accepted and ignored.
    """

    __slots__ = ("_waitable",)

    def __init__(self, waitable: Waitable) -> None:
        if not callable(getattr(waitable, "wait", None)):
            raise TypeError(f"object has no callable wait(): {waitable!r}")
        self._waitable = waitable

    def wait_one(self, timeout_ms: int = INFINITE_TIMEOUT_MS, exit_context: bool = False) -> bool:
        if timeout_ms == INFINITE_TIMEOUT_MS:
            return bool(self._waitable.wait(None))
        if timeout_ms < 0:
            raise ValueError(f"timeout_ms must be non-negative or {INFINITE_TIMEOUT_MS}: {timeout_ms}")
        return bool(self._waitable.wait(timeout_ms / 1000.0))


def wait_one(handle: WaitHandle, timeout: timedelta, exit_context: bool = False) -> bool:
    """Block on ``handle`` for up to ``timeout`` and report whether it was signalled.

    Waits longer than :data:`MAX_WAIT` are issued as a sequence of
    ``MAX_WAIT`` chunks followed by one wait for the remainder, so the total
    unsignalled time matches ``timeout``. An :data:`INFINITE` timeout blocks
    without a limit and always returns ``True``.

    ``exit_context`` is forwarded unchanged to every call on ``handle``,
    the unbounded one included. Handles that have no use for it ignore it.
    """

    if timeout == INFINITE:
        handle.wait_one(INFINITE_TIMEOUT_MS, exit_context)
        return True

    chunk_ms = to_milliseconds_timeout(MAX_WAIT)
    chunks = 0
    while timeout > MAX_WAIT:
        chunks += 1
        _LOGGER.debug("waiting chunk %d of %d ms (remaining %s)", chunks, chunk_ms, timeout)
        if handle.wait_one(chunk_ms, exit_context):
            return True
        timeout -= MAX_WAIT

    return handle.wait_one(to_milliseconds_timeout(timeout), exit_context)
