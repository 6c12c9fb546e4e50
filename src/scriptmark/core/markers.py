"""Inline marker strategies: each finds one marker occurrence in a text fragment.

A MarkerRule owns one compiled pattern and knows how to turn a match into a
typed Span. Rules are combined into ordered tuples; the tokenizer tries them
in tuple order against the whole remaining text.

// [LAW:one-source-of-truth] All marker syntax lives here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from collections.abc import Callable


# ─── Span model ──────────────────────────────────────────────────────────────


class SpanKind(Enum):
    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"
    COLOR = "color"
    SIZE = "size"
    HIGHLIGHT = "highlight"
    QUOTE = "quote"


@dataclass(frozen=True)
class Span:
    """A flat unit of parsed output. payload is never re-scanned.

    variant: color name for COLOR, "small"/"large" for SIZE, else None.
    """

    kind: SpanKind
    payload: str
    variant: str | None = None


def text_span(payload: str) -> Span:
    return Span(SpanKind.TEXT, payload)


# ─── Rules ───────────────────────────────────────────────────────────────────

COLOR_NAMES = ("red", "blue", "green", "yellow", "purple", "orange")
SIZE_NAMES = ("small", "large")


@dataclass(frozen=True)
class MarkerMatch:
    start: int
    end: int  # exclusive
    span: Span


@dataclass(frozen=True)
class MarkerRule:
    """One marker type: a pattern plus the span builder for its matches."""

    name: str
    pattern: re.Pattern
    build: Callable[[re.Match], Span]

    def find(self, text: str) -> MarkerMatch | None:
        """Leftmost occurrence of this marker anywhere in text, or None."""
        m = self.pattern.search(text)
        if m is None:
            return None
        return MarkerMatch(m.start(), m.end(), self.build(m))


def _simple(kind: SpanKind) -> Callable[[re.Match], Span]:
    return lambda m: Span(kind, m.group(1))


def _build_size(m: re.Match) -> Span:
    # Alternation groups: {size:text} | ~text~ | ^text^
    if m.group(1) is not None:
        return Span(SpanKind.SIZE, m.group(2), m.group(1))
    if m.group(3) is not None:
        return Span(SpanKind.SIZE, m.group(3), "small")
    return Span(SpanKind.SIZE, m.group(4), "large")


COLOR = MarkerRule(
    "color",
    re.compile(r"\{(" + "|".join(COLOR_NAMES) + r"):([^}]+)\}"),
    lambda m: Span(SpanKind.COLOR, m.group(2), m.group(1)),
)

SIZE = MarkerRule(
    "size",
    re.compile(
        r"\{(" + "|".join(SIZE_NAMES) + r"):([^}]+)\}"
        r"|~([^~]+)~"
        r"|\^([^^]+)\^"
    ),
    _build_size,
)

HIGHLIGHT = MarkerRule("highlight", re.compile(r"\[([^\]]+)\]"), _simple(SpanKind.HIGHLIGHT))

QUOTE = MarkerRule("quote", re.compile(r'"([^"]+)"'), _simple(SpanKind.QUOTE))

BOLD = MarkerRule("bold", re.compile(r"\*\*([^*]+)\*\*"), _simple(SpanKind.BOLD))

BOLD_ALT = MarkerRule("bold_alt", re.compile(r"__([^_]+)__"), _simple(SpanKind.BOLD))

# Must stay after BOLD: "**a**" would otherwise match as "*" + italic("a") + "*".
ITALIC = MarkerRule("italic", re.compile(r"\*([^*]+)\*"), _simple(SpanKind.ITALIC))


# Rule order per call site. Order is the priority cascade, not document order.
CONTENT_RULES: tuple[MarkerRule, ...] = (
    COLOR,
    SIZE,
    HIGHLIGHT,
    QUOTE,
    BOLD,
    BOLD_ALT,
    ITALIC,
)

SCRIPT_RULES: tuple[MarkerRule, ...] = (
    COLOR,
    SIZE,
    HIGHLIGHT,
)

RULES_BY_NAME: dict[str, MarkerRule] = {
    rule.name: rule for rule in (COLOR, SIZE, HIGHLIGHT, QUOTE, BOLD, BOLD_ALT, ITALIC)
}


def rules_from_names(names: list[str] | tuple[str, ...]) -> tuple[MarkerRule, ...]:
    """Build an ordered rule tuple from rule names. Unknown names raise KeyError."""
    return tuple(RULES_BY_NAME[name] for name in names)
