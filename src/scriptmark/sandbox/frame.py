"""SandboxFrame: a host rendering site owning exactly one surface.

The frame creates the surface, keeps its handle, and wires a HeightChannel
that trusts only that handle. Content changes fully replace the surface
content (never patched) after cancelling every pending timer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from scriptmark.sandbox.channel import HeightChannel, MessageBus
from scriptmark.sandbox.config import SandboxConfig
from scriptmark.sandbox.context import ConsoleRenderContext, RenderContext
from scriptmark.sandbox.document import fingerprint
from scriptmark.sandbox.scheduler import Scheduler
from scriptmark.sandbox.surface import SandboxSurface, SurfaceHandle

logger = logging.getLogger(__name__)


class SandboxFrame:
    def __init__(
        self,
        scheduler: Scheduler,
        bus: MessageBus | None = None,
        context: RenderContext | None = None,
        config: SandboxConfig | None = None,
        on_height: Callable[[float], None] | None = None,
        name: str = "frame",
    ):
        self.config = config or SandboxConfig()
        self.bus = bus or MessageBus(scheduler)
        self.context = context or ConsoleRenderContext(
            width=self.config.width, line_height=self.config.line_height
        )
        self.handle = SurfaceHandle(name)
        self.surface = SandboxSurface(
            self.context,
            scheduler,
            post=self.bus.port(self.handle),
            config=self.config,
            handle=self.handle,
        )
        self.channel = HeightChannel(self.handle, scheduler, on_apply=on_height, config=self.config)
        self.bus.subscribe(self.channel.on_message)
        self.closed = False

    @property
    def height(self) -> float:
        return self.channel.height

    def set_content(self, content: str) -> None:
        if self.closed:
            return
        fp = fingerprint(content)
        if fp == self.channel.state.content_fingerprint:
            return
        self.channel.reset(fp)
        self.surface.mount(content)

    def notify_host_scroll(self) -> None:
        self.channel.on_host_scroll()

    def resize(self, width: int) -> None:
        set_width = getattr(self.context, "set_width", None)
        if set_width is not None:
            set_width(width)

    def scroll_surface(self, rows: int) -> None:
        """Scroll inside the surface; its reports hold until scrolling settles."""
        scroll_by = getattr(self.context, "scroll_by", None)
        if scroll_by is not None and not self.closed:
            scroll_by(rows)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.bus.unsubscribe(self.channel.on_message)
        self.channel.teardown()
        self.surface.teardown()
        logger.debug("%r closed", self.handle)
