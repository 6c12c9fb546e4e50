"""Wire format of the height negotiation channel.

Exactly one message shape travels surface → host:

    {"type": "HTML_FRAME_RESIZE", "h": <number>}

There is no version field. Anything else is ignored by the host.
"""

from __future__ import annotations

from dataclasses import dataclass

RESIZE_MESSAGE_TYPE = "HTML_FRAME_RESIZE"


def resize_message(height: int) -> dict:
    return {"type": RESIZE_MESSAGE_TYPE, "h": height}


def parse_resize_message(data: object) -> float | None:
    """Return the reported height, or None for any unrecognized shape."""
    if not isinstance(data, dict) or data.get("type") != RESIZE_MESSAGE_TYPE:
        return None
    h = data.get("h")
    if isinstance(h, bool) or not isinstance(h, (int, float)):
        return None
    if h != h or h in (float("inf"), float("-inf")):
        return None
    return h


@dataclass(frozen=True)
class MessageEvent:
    """A delivered message plus the identity of the surface that posted it."""

    source: object
    data: object
