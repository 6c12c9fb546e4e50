"""Styled output for Document structures.

render_document() converts the IR from formatting.py into a Rich Text for
terminal display; render_html() emits an escaped HTML fragment. Neither path
re-parses span payloads.

# [LAW:single-enforcer] All span/line styling decisions live in this module.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field

from rich.text import Text

from scriptmark.core.classifier import LineRole
from scriptmark.core.markers import Span, SpanKind
from scriptmark.formatting import Document, FormattedLine


# Marker colour names → display colour. Rich style strings must not contain spaces.
COLOR_MAP: dict[str, str] = {
    "red": "rgb(220,38,38)",
    "blue": "rgb(37,99,235)",
    "green": "rgb(22,163,74)",
    "yellow": "rgb(202,138,4)",
    "purple": "rgb(168,85,247)",
    "orange": "rgb(249,115,22)",
}


@dataclass(frozen=True)
class RenderStyles:
    """Rich style strings for every span kind and line role."""

    bold: str = "bold"
    italic: str = "bold italic"
    highlight: str = "bold rgb(37,99,235) on rgb(239,246,255)"
    quote: str = "bold rgb(168,85,247)"
    small: str = "dim"
    large: str = "bold"
    paragraph: str = ""
    step_label: str = "bold"
    headings: dict[int, str] = field(
        default_factory=lambda: {
            1: "bold underline",
            2: "bold underline",
            3: "bold",
            5: "bold italic",
        }
    )

    def heading(self, level: int) -> str:
        return self.headings.get(level, "bold")


DEFAULT_STYLES = RenderStyles()


# ─── Rich ────────────────────────────────────────────────────────────────────


def span_style(span: Span, styles: RenderStyles = DEFAULT_STYLES) -> str:
    kind = span.kind
    if kind is SpanKind.COLOR:
        return COLOR_MAP.get(span.variant or "", "")
    if kind is SpanKind.SIZE:
        return styles.small if span.variant == "small" else styles.large
    return {
        SpanKind.TEXT: "",
        SpanKind.BOLD: styles.bold,
        SpanKind.ITALIC: styles.italic,
        SpanKind.HIGHLIGHT: styles.highlight,
        SpanKind.QUOTE: styles.quote,
    }[kind]


def render_line(fl: FormattedLine, styles: RenderStyles = DEFAULT_STYLES) -> Text:
    line = fl.line
    if line.role is LineRole.SPACER:
        return Text("")
    if line.role is LineRole.HEADING:
        return Text(line.text, style=styles.heading(line.level))
    if line.role is LineRole.STEP_LABEL:
        return Text(line.text, style=styles.step_label)

    text = Text(style=styles.paragraph)
    for span in fl.spans:
        text.append(span.payload, style=span_style(span, styles))
    return text


def render_document(doc: Document, styles: RenderStyles = DEFAULT_STYLES) -> Text:
    """One Rich Text for the whole document, lines joined by newlines."""
    return Text("\n").join(render_line(fl, styles) for fl in doc.lines)


# ─── HTML ────────────────────────────────────────────────────────────────────


def _span_html(span: Span) -> str:
    payload = html.escape(span.payload)
    kind = span.kind
    if kind is SpanKind.TEXT:
        return payload
    if kind is SpanKind.BOLD:
        return f"<strong>{payload}</strong>"
    if kind is SpanKind.ITALIC:
        return f"<em>{payload}</em>"
    if kind is SpanKind.COLOR:
        color = COLOR_MAP.get(span.variant or "", "inherit")
        return f'<span style="color: {color}">{payload}</span>'
    if kind is SpanKind.SIZE:
        return f'<span class="size-{span.variant}">{payload}</span>'
    if kind is SpanKind.HIGHLIGHT:
        return f'<span class="highlight">{payload}</span>'
    return f'<span class="quote">{payload}</span>'


def _line_html(fl: FormattedLine) -> str:
    line = fl.line
    if line.role is LineRole.SPACER:
        return '<div class="spacer"></div>'
    if line.role in (LineRole.HEADING, LineRole.STEP_LABEL):
        level = min(max(line.level, 1), 6)
        return f"<h{level}>{html.escape(line.text)}</h{level}>"
    return "<p>" + "".join(_span_html(s) for s in fl.spans) + "</p>"


def render_html(doc: Document) -> str:
    """Escaped HTML fragment, one element per line."""
    return "\n".join(_line_html(fl) for fl in doc.lines)
