"""Line classification: decides a line's block role from structural cues.

Rules are checked in order; the first match wins. Two rule lists exist, one
per call site: CONTENT_LINE_RULES (notes, summaries, training content) and
SCRIPT_LINE_RULES (call scripts).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from collections.abc import Callable


class LineRole(Enum):
    HEADING = "heading"
    STEP_LABEL = "step_label"
    SPACER = "spacer"
    PARAGRAPH = "paragraph"


STEP_LABEL_LEVEL = 4


@dataclass(frozen=True)
class Line:
    """One classified input line.

    raw: the line as given. text: display text with wrappers stripped.
    level: heading level for HEADING/STEP_LABEL, 0 otherwise.
    """

    raw: str
    role: LineRole
    level: int = 0
    text: str = ""


# A rule returns a Line when it claims the raw line, else None.
LineRule = Callable[[str], "Line | None"]


# ─── Content rules ───────────────────────────────────────────────────────────

_NUMBERED_ITEM_RE = re.compile(r"^\d+\.\s+[A-Z]", re.ASCII)
_CAPS_LABEL_RE = re.compile(r"^[A-Z\s]+:$")
_MARKED_CAPS_RE = re.compile(r"^[*#]+\s*[A-Z][^a-z]*$")
_LEADING_MARKS_RE = re.compile(r"^[*#]+\s*")
_STEP_PREFIX_RE = re.compile(r"^(stage|phase|step)\s+\d+", re.IGNORECASE | re.ASCII)
_BOLD_LINE_RE = re.compile(r"^\*\*([^*]+)\*\*$")


def _strip_colon(text: str) -> str:
    return text[:-1] if text.endswith(":") else text


def numbered_item(raw: str) -> Line | None:
    if _NUMBERED_ITEM_RE.match(raw):
        return Line(raw, LineRole.HEADING, 3, raw)
    return None


def caps_label(raw: str) -> Line | None:
    if _CAPS_LABEL_RE.match(raw) or _MARKED_CAPS_RE.match(raw):
        return Line(raw, LineRole.HEADING, 3, _strip_colon(_LEADING_MARKS_RE.sub("", raw, count=1)))
    return None


def step_label(raw: str) -> Line | None:
    # Shouted lines ("STAGE 2: DISCOVERY") are not step labels.
    if not any(ch.islower() for ch in raw):
        return None
    if _STEP_PREFIX_RE.match(raw):
        return Line(raw, LineRole.STEP_LABEL, STEP_LABEL_LEVEL, raw)
    return None


def short_label(raw: str) -> Line | None:
    if _BOLD_LINE_RE.match(raw) or (raw.endswith(":") and len(raw) < 60 and "." not in raw):
        text = raw
        if text.startswith("**"):
            text = text[2:]
        if text.endswith("**"):
            text = text[:-2]
        return Line(raw, LineRole.HEADING, 5, _strip_colon(text))
    return None


def spacer(raw: str) -> Line | None:
    if not raw.strip():
        return Line(raw, LineRole.SPACER)
    return None


CONTENT_LINE_RULES: tuple[LineRule, ...] = (
    numbered_item,
    caps_label,
    step_label,
    short_label,
    spacer,
)


# ─── Script rules ────────────────────────────────────────────────────────────


def script_title(raw: str) -> Line | None:
    if raw.startswith("**") and raw.endswith("**"):
        return Line(raw, LineRole.HEADING, 2, raw[2:-2])
    return None


def script_section(raw: str) -> Line | None:
    if raw.startswith("# "):
        return Line(raw, LineRole.HEADING, 3, raw[2:])
    return None


SCRIPT_LINE_RULES: tuple[LineRule, ...] = (
    spacer,
    script_title,
    script_section,
)


# ─── Entry point ─────────────────────────────────────────────────────────────


def classify(raw: str, rules: tuple[LineRule, ...] = CONTENT_LINE_RULES) -> Line:
    """Classify one line. Falls back to PARAGRAPH; never raises."""
    for rule in rules:
        line = rule(raw)
        if line is not None:
            return line
    return Line(raw, LineRole.PARAGRAPH, 0, raw)
