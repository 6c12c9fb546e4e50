"""Timer scheduling and the per-owner cancellation token.

Everything in the sandbox layer suspends through a Scheduler; nothing blocks.
Adapters exist for asyncio and for Textual's set_timer.

TimerGroup is the cancellation token: it records every pending timer under a
slot name, replaces a slot's earlier timer on reschedule, and refuses to
schedule anything once closed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop (running loop by default)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class _TextualTimerHandle:
    def __init__(self, timer):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class _QueuedHandle:
    """Handle for immediate work queued on the pump; cancel only marks it dead."""

    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class TextualScheduler:
    """Scheduler backed by a Textual MessagePump (App or Widget).

    Positive delays use set_timer. Zero delays go through call_later, which
    runs after the pump's queued messages and keeps arrival order; a Textual
    Timer cannot run with a zero interval.
    """

    def __init__(self, pump):
        self._pump = pump

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        if delay <= 0:
            handle = _QueuedHandle()

            def _run() -> None:
                if not handle.cancelled:
                    callback()

            self._pump.call_later(_run)
            return handle
        return _TextualTimerHandle(self._pump.set_timer(delay, callback))


class TimerGroup:
    """Named timer slots owned by one surface or channel."""

    def __init__(self, scheduler: Scheduler, owner: str = ""):
        self._scheduler = scheduler
        self._owner = owner
        self._timers: dict[str, TimerHandle] = {}
        self.closed = False

    def schedule(self, slot: str, delay: float, callback: Callable[[], None]) -> None:
        """(Re)start the timer in slot. No-op once the group is closed."""
        if self.closed:
            logger.debug("%s: refusing to schedule %r after close", self._owner, slot)
            return
        self.cancel(slot)

        def _fire() -> None:
            # A cancelled or replaced timer that still fires is stale.
            if self._timers.get(slot) is not handle:
                return
            del self._timers[slot]
            callback()

        handle = self._scheduler.call_later(delay, _fire)
        self._timers[slot] = handle

    def cancel(self, slot: str) -> None:
        handle = self._timers.pop(slot, None)
        if handle is not None:
            handle.cancel()

    def pending(self, slot: str) -> bool:
        return slot in self._timers

    def cancel_all(self) -> None:
        for slot in list(self._timers):
            self.cancel(slot)

    def close(self) -> None:
        """Cancel everything and refuse further scheduling."""
        self.cancel_all()
        self.closed = True
