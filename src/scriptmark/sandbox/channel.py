"""Height negotiation: the host side of the surface → host channel.

MessageBus is the host's message window: surfaces post through a port bound
to their own handle, and delivery is scheduled so handlers run in arrival
order and never re-enter the poster.

HeightChannel applies reports to host layout state. A report is dropped
silently unless all of these hold:
1. it was posted by the one surface this host created (identity check)
2. the host viewport is not scrolling
3. it differs from the applied height by more than the noise threshold
Accepted reports go through a debounce window; the last one wins.

// [LAW:single-enforcer] SurfaceState is mutated only by HeightChannel.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from scriptmark.sandbox.config import SandboxConfig
from scriptmark.sandbox.messages import MessageEvent, parse_resize_message
from scriptmark.sandbox.scheduler import Scheduler, TimerGroup

logger = logging.getLogger(__name__)

SLOT_APPLY = "apply"
SLOT_HOST_SCROLL = "host_scroll"


# ─── Message bus ─────────────────────────────────────────────────────────────


class MessageBus:
    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._listeners: list[Callable[[MessageEvent], None]] = []

    def subscribe(self, listener: Callable[[MessageEvent], None]) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[MessageEvent], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def post(self, data: object, source: object) -> None:
        event = MessageEvent(source=source, data=data)
        self._scheduler.call_later(0, lambda: self._deliver(event))

    def port(self, source: object) -> Callable[[object], None]:
        """A post function bound to source, handed to the surface that owns it."""
        return lambda data: self.post(data, source)

    def _deliver(self, event: MessageEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


# ─── Host state ──────────────────────────────────────────────────────────────


class ChannelPhase(Enum):
    IDLE = "idle"
    SCROLLING = "scrolling"
    DEBOUNCE_PENDING = "debounce_pending"


@dataclass
class SurfaceState:
    last_applied_height: float
    pending_height: float | None = None
    is_scrolling: bool = False
    content_fingerprint: str = ""


class HeightChannel:
    """Accepts height reports from exactly one surface and applies them."""

    def __init__(
        self,
        expected_source: object,
        scheduler: Scheduler,
        on_apply: Callable[[float], None] | None = None,
        config: SandboxConfig | None = None,
    ):
        self.config = config or SandboxConfig()
        self._expected_source = expected_source
        self._on_apply = on_apply
        self._timers = TimerGroup(scheduler, owner="host")
        self.state = SurfaceState(last_applied_height=self.config.fallback_height)

    @property
    def phase(self) -> ChannelPhase:
        if self.state.is_scrolling:
            return ChannelPhase.SCROLLING
        if self._timers.pending(SLOT_APPLY):
            return ChannelPhase.DEBOUNCE_PENDING
        return ChannelPhase.IDLE

    @property
    def height(self) -> float:
        return self.state.last_applied_height

    # ── Inbound ──

    def on_message(self, event: MessageEvent) -> None:
        if self._timers.closed:
            return
        if event.source is not self._expected_source:
            logger.debug("dropping message from foreign source %r", event.source)
            return
        height = parse_resize_message(event.data)
        if height is None:
            return
        if self.state.is_scrolling:
            logger.debug("dropping height %s while host scrolls", height)
            return
        if abs(height - self.state.last_applied_height) <= self.config.host_noise_threshold:
            return
        self.state.pending_height = height
        self._timers.schedule(SLOT_APPLY, self.config.host_apply_delay, self._apply)

    def on_host_scroll(self) -> None:
        self.state.is_scrolling = True
        self._timers.schedule(SLOT_HOST_SCROLL, self.config.scroll_settle_delay, self._host_scroll_settled)

    def _host_scroll_settled(self) -> None:
        self.state.is_scrolling = False

    def _apply(self) -> None:
        height = self.state.pending_height
        self.state.pending_height = None
        if height is None:
            return
        self.state.last_applied_height = height
        if self._on_apply is not None:
            self._on_apply(height)

    # ── Lifecycle ──

    def reset(self, content_fingerprint: str) -> None:
        """Content changed: drop the pending apply, keep the applied height.

        Host scrolling is left to settle on its own timer.
        """
        self._timers.cancel(SLOT_APPLY)
        self.state.pending_height = None
        self.state.content_fingerprint = content_fingerprint

    def teardown(self) -> None:
        self._timers.close()
        self.state.pending_height = None
