"""SandboxSurface: the isolated side of the height negotiation.

The surface writes its content into a RenderContext, watches that context for
layout changes and scroll activity, and posts HTML_FRAME_RESIZE reports
through the port it was given. It never touches host state.

Reporting rules:
- layout changes are coalesced by the resize timer; one report per burst
- nothing is reported while the surface is scrolling (scroll settle timer)
- a report is posted only when it moves more than the report threshold
  away from the last *reported* height
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from scriptmark.sandbox.config import SandboxConfig
from scriptmark.sandbox.context import RenderContext, SurfaceAccessError
from scriptmark.sandbox.document import fingerprint, wrapper_document
from scriptmark.sandbox.messages import resize_message
from scriptmark.sandbox.scheduler import Scheduler, TimerGroup

logger = logging.getLogger(__name__)

SLOT_RESIZE = "resize"
SLOT_SCROLL_SETTLE = "scroll_settle"


class SurfaceHandle:
    """Opaque identity of one surface. Compared with `is`, never by value."""

    __slots__ = ("name",)

    def __init__(self, name: str = "surface"):
        self.name = name

    def __repr__(self) -> str:
        return f"<SurfaceHandle {self.name} {id(self):#x}>"


class SandboxSurface:
    def __init__(
        self,
        context: RenderContext,
        scheduler: Scheduler,
        post: Callable[[object], None],
        config: SandboxConfig | None = None,
        handle: SurfaceHandle | None = None,
    ):
        self.config = config or SandboxConfig()
        self.handle = handle or SurfaceHandle()
        self._context = context
        self._post = post
        self._timers = TimerGroup(scheduler, owner=repr(self.handle))
        # Ephemeral measurement state only.
        self._fingerprint: str | None = None
        self.is_scrolling = False
        self.last_reported_height = 0
        context.observe_layout(self.on_layout_change)
        context.observe_scroll(self.on_scroll)

    @property
    def fingerprint(self) -> str | None:
        return self._fingerprint

    def mount(self, content: str) -> bool:
        """Write content unless it is already rendered. Returns True on rewrite.

        An inaccessible context makes this a silent no-op.
        """
        fp = fingerprint(content)
        if fp == self._fingerprint:
            return False
        self._timers.cancel_all()
        self.is_scrolling = False
        try:
            self._context.write(wrapper_document(content))
        except SurfaceAccessError:
            logger.debug("%r: document not accessible, mount skipped", self.handle)
            return False
        self._fingerprint = fp
        return True

    # ── Observers ──

    def on_layout_change(self) -> None:
        self._timers.schedule(SLOT_RESIZE, self.config.surface_resize_delay, self._report)

    def on_scroll(self) -> None:
        self.is_scrolling = True
        self._timers.schedule(SLOT_SCROLL_SETTLE, self.config.scroll_settle_delay, self._scroll_settled)

    def _scroll_settled(self) -> None:
        self.is_scrolling = False
        # Layout may have moved while reports were held back.
        self.on_layout_change()

    # ── Reporting ──

    def measure(self) -> int | None:
        try:
            return self._context.measure().height
        except SurfaceAccessError:
            return None

    def _report(self) -> None:
        if self.is_scrolling:
            return
        height = self.measure()
        if height is None:
            return
        if abs(height - self.last_reported_height) <= self.config.surface_report_threshold:
            return
        self.last_reported_height = height
        self._post(resize_message(height))

    def teardown(self) -> None:
        self._timers.close()
        self._context.disconnect()
