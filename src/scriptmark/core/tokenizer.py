"""Inline tokenizer: priority-cascade matching of markers in a paragraph line.

Each iteration asks the rules, in priority order, for a match anywhere in the
remaining text. The first rule with any match wins, even when a lower-priority
marker starts earlier. The text before the winning match is committed as
plain text and never re-scanned, so "**A** {red:B}" keeps its asterisks.

That quirk is relied on by existing content; do not "fix" it here.

// [LAW:dataflow-not-control-flow] tokenize_line() is a pure function: text in, spans out.
"""

from __future__ import annotations

from scriptmark.core.markers import (
    CONTENT_RULES,
    MarkerMatch,
    MarkerRule,
    Span,
    text_span,
)


def _first_rule_match(text: str, rules: tuple[MarkerRule, ...]) -> MarkerMatch | None:
    for rule in rules:
        found = rule.find(text)
        if found is not None:
            return found
    return None


def tokenize_line(text: str, rules: tuple[MarkerRule, ...] = CONTENT_RULES) -> list[Span]:
    """Split one line into a flat list of Spans.

    Total over all strings. Unterminated markers fall through as literal text.
    The empty string yields a single empty text span.
    """
    if not text:
        return [text_span(text)]

    spans: list[Span] = []
    remaining = text
    while remaining:
        found = _first_rule_match(remaining, rules)
        if found is None:
            spans.append(text_span(remaining))
            break
        if found.start > 0:
            spans.append(text_span(remaining[: found.start]))
        spans.append(found.span)
        remaining = remaining[found.end :]
    return spans


def plain_text(spans: list[Span]) -> str:
    """Concatenate span payloads (markers dropped)."""
    return "".join(s.payload for s in spans)
