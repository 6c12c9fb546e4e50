"""Content routing: marker text goes to the tokenizer, rich markup to the sandbox.

A plain substring sniff, not markup validation. Plain text that happens to
contain one of the trigger substrings is routed to the sandbox as well.
"""

from __future__ import annotations

from enum import Enum


class RenderPath(Enum):
    TOKENIZER = "tokenizer"
    SANDBOX = "sandbox"


# Paragraph, span-opening, strong and highlight tags.
RICH_MARKUP_SUBSTRINGS: tuple[str, ...] = ("<p>", "<span", "<strong>", "<mark>")


def is_rich_markup(content: str) -> bool:
    return any(marker in content for marker in RICH_MARKUP_SUBSTRINGS)


def route(content: str) -> RenderPath:
    return RenderPath.SANDBOX if is_rich_markup(content) else RenderPath.TOKENIZER
