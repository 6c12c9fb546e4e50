"""Rendering contexts for sandbox surfaces.

A RenderContext is the isolated document a surface writes into. It lays the
document out, exposes box metrics, and notifies observers on layout changes
and on its own scroll activity. It never shares styles or state with the host.

ConsoleRenderContext is the terminal implementation: the document is parsed
with BeautifulSoup, active content is dropped, and the remaining text is laid
out by a private Rich Console at the surface width. Heights are reported in
units of rendered rows × line_height.
"""

from __future__ import annotations

import io
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from rich.console import Console
from rich.text import Text

from scriptmark.sandbox.document import CONTENT_ELEMENT_ID


class SurfaceAccessError(Exception):
    """The surface's document cannot be written or read."""


@dataclass(frozen=True)
class SurfaceMetrics:
    """Box heights of the measurement element and of the document body."""

    content_scroll_height: int = 0
    content_offset_height: int = 0
    content_client_height: int = 0
    body_scroll_height: int = 0
    body_offset_height: int = 0

    @property
    def height(self) -> int:
        # Content can overflow its nominal container; the largest box wins.
        return max(
            self.content_scroll_height,
            self.content_offset_height,
            self.content_client_height,
            self.body_scroll_height,
            self.body_offset_height,
        )


class RenderContext(Protocol):
    def write(self, document: str) -> None: ...

    def measure(self) -> SurfaceMetrics: ...

    def observe_layout(self, callback: Callable[[], None]) -> None: ...

    def observe_scroll(self, callback: Callable[[], None]) -> None: ...

    def disconnect(self) -> None: ...


# ─── Console implementation ──────────────────────────────────────────────────

# Tags that could execute code or pull in foreign resources.
ACTIVE_TAGS = ("script", "style", "noscript", "iframe", "frame", "object", "embed", "link", "template")

_BLOCK_TAGS = {
    "div", "p", "article", "section", "main", "aside", "nav",
    "header", "footer", "blockquote", "pre",
    "li", "ul", "ol", "dl", "dt", "dd",
    "td", "th", "tr", "table",
    "h1", "h2", "h3", "h4", "h5", "h6", "hr", "figure", "figcaption",
}

_WS_RE = re.compile(r"[ \t\r\f\v]+")


def neutralize(soup: BeautifulSoup) -> None:
    """Drop active tags, event-handler attributes and javascript: URLs in place."""
    for tag in soup.find_all(ACTIVE_TAGS):
        tag.decompose()
    for tag in soup.find_all(True):
        for attr in list(tag.attrs):
            value = tag.attrs[attr]
            if attr.lower().startswith("on"):
                del tag.attrs[attr]
            elif isinstance(value, str) and value.strip().lower().startswith("javascript:"):
                del tag.attrs[attr]


def layout_lines(el: Tag) -> list[str]:
    """Flatten an element into display lines, one per block boundary."""
    parts: list[str] = []

    def walk(node: Tag) -> None:
        for child in node.children:
            if isinstance(child, Comment):
                continue
            if isinstance(child, NavigableString):
                parts.append(_WS_RE.sub(" ", str(child)))
                continue
            if not isinstance(child, Tag):
                continue
            if child.name == "br":
                parts.append("\n")
            elif child.name == "img":
                parts.append(f"\n[image: {child.get('alt') or ''}]\n")
            else:
                block = child.name in _BLOCK_TAGS
                if block:
                    parts.append("\n")
                walk(child)
                if block:
                    parts.append("\n")

    walk(el)
    lines = (line.strip() for line in "".join(parts).split("\n"))
    return [line for line in lines if line]


class ConsoleRenderContext:
    """Isolated terminal document laid out by its own Rich Console."""

    def __init__(self, width: int = 80, line_height: int = 20, accessible: bool = True):
        self.width = max(1, width)
        self.line_height = line_height
        self.accessible = accessible
        self.scroll_offset = 0
        self._soup: BeautifulSoup | None = None
        self._layout_observers: list[Callable[[], None]] = []
        self._scroll_observers: list[Callable[[], None]] = []

    # ── Document ──

    def write(self, document: str) -> None:
        if not self.accessible:
            raise SurfaceAccessError("surface document is not accessible")
        soup = BeautifulSoup(document, "html.parser")
        neutralize(soup)
        self._soup = soup
        self.scroll_offset = 0
        self._notify(self._layout_observers)

    @property
    def document(self) -> str | None:
        """Serialized document as laid out (active content removed)."""
        return None if self._soup is None else str(self._soup)

    def text_lines(self) -> list[str]:
        if self._soup is None:
            return []
        el = self._soup.find(id=CONTENT_ELEMENT_ID)
        return layout_lines(el) if isinstance(el, Tag) else []

    # ── Layout ──

    def set_width(self, width: int) -> None:
        width = max(1, width)
        if width == self.width:
            return
        self.width = width
        if self._soup is not None:
            self._notify(self._layout_observers)

    def _rows(self, lines: list[str]) -> int:
        if not lines:
            return 0
        console = Console(width=self.width, file=io.StringIO(), color_system=None)
        return len(Text("\n".join(lines)).wrap(console, self.width))

    def measure(self) -> SurfaceMetrics:
        if not self.accessible:
            raise SurfaceAccessError("surface document is not accessible")
        if self._soup is None:
            return SurfaceMetrics()
        content = self._soup.find(id=CONTENT_ELEMENT_ID)
        body = self._soup.body or self._soup
        content_units = self._rows(layout_lines(content)) * self.line_height if isinstance(content, Tag) else 0
        body_units = self._rows(layout_lines(body)) * self.line_height
        return SurfaceMetrics(
            content_scroll_height=content_units,
            content_offset_height=content_units,
            content_client_height=content_units,
            body_scroll_height=body_units,
            body_offset_height=body_units,
        )

    # ── Observation ──

    def observe_layout(self, callback: Callable[[], None]) -> None:
        self._layout_observers.append(callback)

    def observe_scroll(self, callback: Callable[[], None]) -> None:
        self._scroll_observers.append(callback)

    def scroll_by(self, rows: int) -> None:
        self.scroll_offset = max(0, self.scroll_offset + rows)
        self._notify(self._scroll_observers)

    def disconnect(self) -> None:
        self._layout_observers.clear()
        self._scroll_observers.clear()

    @staticmethod
    def _notify(observers: list[Callable[[], None]]) -> None:
        for callback in list(observers):
            callback()
