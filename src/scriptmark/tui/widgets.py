"""Textual widgets for formatted content.

FormattedContent routes its source string: marker text is formatted and
rendered as Rich Text; rich markup goes into a SandboxFrame whose negotiated
height (in units) sets the widget height (in rows).
"""

from __future__ import annotations

import logging
import math

from rich.text import Text
from textual.containers import ScrollableContainer
from textual.widgets import Static

from scriptmark.core.router import RenderPath
from scriptmark.formatting import CONTENT_PROFILE, FormatProfile, RichContent, format_content
from scriptmark.rendering import render_document
from scriptmark.sandbox.config import SandboxConfig
from scriptmark.sandbox.context import ConsoleRenderContext
from scriptmark.sandbox.frame import SandboxFrame
from scriptmark.sandbox.scheduler import TextualScheduler

logger = logging.getLogger(__name__)


class FormattedContent(Static):
    DEFAULT_CSS = """
    FormattedContent {
        height: auto;
        width: 1fr;
    }
    """

    def __init__(
        self,
        source: str = "",
        *,
        profile: FormatProfile = CONTENT_PROFILE,
        config: SandboxConfig | None = None,
        **kwargs,
    ):
        super().__init__("", **kwargs)
        self._source = source
        self.profile = profile
        self.config = config or SandboxConfig()
        self.active_path: RenderPath | None = None
        self.document = None
        self.frame: SandboxFrame | None = None

    # ── Lifecycle ──

    def on_mount(self) -> None:
        for node in self.ancestors:
            if isinstance(node, ScrollableContainer):
                self.watch(node, "scroll_y", self._host_scrolled, init=False)
                break
        self.set_source(self._source)

    def on_unmount(self) -> None:
        self._close_frame()

    def on_resize(self, event) -> None:
        if self.frame is not None and event.size.width > 0:
            self.frame.resize(event.size.width)

    def on_mouse_scroll_down(self, event) -> None:
        if self.frame is not None:
            self.frame.scroll_surface(1)

    def on_mouse_scroll_up(self, event) -> None:
        if self.frame is not None:
            self.frame.scroll_surface(-1)

    # ── Content ──

    def set_source(self, source: str) -> None:
        self._source = source
        result = format_content(source, self.profile)
        if isinstance(result, RichContent):
            self.active_path = RenderPath.SANDBOX
            self.document = None
            frame = self._ensure_frame()
            frame.set_content(result.markup)
            self._apply_height(frame.height)
            return

        self._close_frame()
        self.active_path = RenderPath.TOKENIZER
        self.document = result
        self.styles.height = "auto"
        self.update(render_document(result))

    def _ensure_frame(self) -> SandboxFrame:
        if self.frame is None:
            context = ConsoleRenderContext(
                width=self.size.width or self.config.width,
                line_height=self.config.line_height,
            )
            self.frame = SandboxFrame(
                TextualScheduler(self),
                context=context,
                config=self.config,
                on_height=self._apply_height,
                name=self.id or "formatted-content",
            )
        return self.frame

    def _close_frame(self) -> None:
        if self.frame is not None:
            self.frame.close()
            self.frame = None

    def _apply_height(self, height: float) -> None:
        rows = max(1, math.ceil(height / max(1, self.config.line_height)))
        self.styles.height = rows
        if self.frame is not None:
            # Surface text only; no host styles.
            self.update(Text("\n".join(self.frame.context.text_lines())))

    def _host_scrolled(self) -> None:
        if self.frame is not None:
            self.frame.notify_host_scroll()
