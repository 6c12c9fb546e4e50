"""Content formatting: structured intermediate representation.

Returns a Document (marker text) or RichContent (pre-rendered markup) that
can be rendered by different backends (rendering.py for Rich/HTML output,
sandbox/ for isolated rich content, tui/ for Textual widgets).

One Formatter serves every call site; a FormatProfile carries the call
site's marker priority order and line rules.
"""

from __future__ import annotations

from dataclasses import dataclass

from scriptmark.core.classifier import (
    CONTENT_LINE_RULES,
    SCRIPT_LINE_RULES,
    Line,
    LineRole,
    LineRule,
    classify,
)
from scriptmark.core.markers import CONTENT_RULES, SCRIPT_RULES, MarkerRule, Span
from scriptmark.core.router import RenderPath, route
from scriptmark.core.tokenizer import tokenize_line


# ─── Profiles ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FormatProfile:
    name: str
    marker_rules: tuple[MarkerRule, ...]
    line_rules: tuple[LineRule, ...]


CONTENT_PROFILE = FormatProfile("content", CONTENT_RULES, CONTENT_LINE_RULES)
SCRIPT_PROFILE = FormatProfile("script", SCRIPT_RULES, SCRIPT_LINE_RULES)

PROFILES: dict[str, FormatProfile] = {
    CONTENT_PROFILE.name: CONTENT_PROFILE,
    SCRIPT_PROFILE.name: SCRIPT_PROFILE,
}


def get_profile(name: str) -> FormatProfile:
    """Look up a profile by name. Unknown names fall back to CONTENT_PROFILE."""
    return PROFILES.get(name, CONTENT_PROFILE)


# ─── Structured IR ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FormattedLine:
    """A classified line. spans is empty for every role except PARAGRAPH."""

    line: Line
    spans: tuple[Span, ...] = ()


@dataclass(frozen=True)
class Document:
    # Insertion order is rendering order.
    lines: tuple[FormattedLine, ...]
    profile: str = CONTENT_PROFILE.name


@dataclass(frozen=True)
class RichContent:
    """Opaque pre-rendered markup, handed to the sandbox verbatim."""

    markup: str


# ─── Formatter ───────────────────────────────────────────────────────────────


class Formatter:
    """Pure, re-entrant transform from a content string to Document/RichContent."""

    def __init__(self, profile: FormatProfile = CONTENT_PROFILE):
        self.profile = profile

    def format_line(self, raw: str) -> FormattedLine:
        line = classify(raw, self.profile.line_rules)
        if line.role is LineRole.PARAGRAPH:
            return FormattedLine(line, tuple(tokenize_line(line.text, self.profile.marker_rules)))
        return FormattedLine(line)

    def format_document(self, content: str) -> Document:
        """Classify and tokenize every line, ignoring routing."""
        return Document(
            tuple(self.format_line(raw) for raw in content.split("\n")),
            self.profile.name,
        )

    def format(self, content: str) -> Document | RichContent:
        if route(content) is RenderPath.SANDBOX:
            return RichContent(content)
        return self.format_document(content)


def format_content(content: str, profile: FormatProfile = CONTENT_PROFILE) -> Document | RichContent:
    return Formatter(profile).format(content)
