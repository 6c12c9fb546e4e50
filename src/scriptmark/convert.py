"""Conversion between marker text and rich editor markup.

markers_to_html produces the markup a rich editor loads: <strong>, <mark>,
<em>, colored <span> and one <p> per line. html_to_markers reads such markup
back into marker text. Both are ordered global replacements; a rule only sees
what earlier rules left behind, so the order below is part of the format.
"""

from __future__ import annotations

import re

from scriptmark.core.markers import COLOR_NAMES
from scriptmark.rendering import COLOR_MAP

_CI = re.IGNORECASE


def _rgb_parts(color: str) -> tuple[str, ...]:
    # "rgb(220,38,38)" -> ("220", "38", "38")
    return tuple(re.findall(r"\d+", color))


def _editor_rgb(color: str) -> str:
    return "rgb({})".format(", ".join(_rgb_parts(color)))


# ─── Markers → markup ────────────────────────────────────────────────────────

_TO_HTML: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\*\*([^*]+)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"__([^_]+)__"), r"<strong>\1</strong>"),
    (re.compile(r"\[([^\]]+)\]"), r"<mark>\1</mark>"),
    (re.compile(r'"([^"]+)"'), r"<em>\1</em>"),
] + [
    (
        re.compile(r"\{" + name + r":([^}]+)\}"),
        f'<span style="color: {_editor_rgb(COLOR_MAP[name])}">' + r"\1</span>",
    )
    for name in COLOR_NAMES
]


def markers_to_html(text: str) -> str:
    """Marker text to editor markup. Blank lines become empty paragraphs."""
    html = text
    for pattern, replacement in _TO_HTML:
        html = pattern.sub(replacement, html)
    return "".join(f"<p>{line}</p>" if line.strip() else "<p></p>" for line in html.split("\n"))


# ─── Markup → markers ────────────────────────────────────────────────────────


def _color_span(color: str) -> re.Pattern[str]:
    r, g, b = _rgb_parts(color)
    rgb = rf"rgb\({r},\s*{g},\s*{b}\)"
    return re.compile(r'<span[^>]*style="[^"]*color:\s*' + rgb + r'[^"]*"[^>]*>(.*?)</span>', _CI)


_TO_MARKERS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"<strong[^>]*>(.*?)</strong>", _CI), r"**\1**"),
    (re.compile(r"<b[^>]*>(.*?)</b>", _CI), r"**\1**"),
    (re.compile(r"<mark[^>]*>(.*?)</mark>", _CI), r"[\1]"),
] + [
    (_color_span(COLOR_MAP[name]), "{" + name + r":\1}")
    for name in COLOR_NAMES
] + [
    (re.compile(r"<em[^>]*>(.*?)</em>", _CI), r'"\1"'),
    (re.compile(r"<i[^>]*>(.*?)</i>", _CI), r'"\1"'),
    (re.compile(r"</p><p[^>]*>", _CI), "\n"),
    (re.compile(r"<br\s*/?>", _CI), "\n"),
    (re.compile(r"<p[^>]*>", _CI), ""),
    (re.compile(r"</p>", _CI), ""),
    (re.compile(r"<[^>]+>"), ""),
]

# Only these entities are decoded; &amp; goes before &lt; and &gt;.
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
)


def html_to_markers(html: str) -> str:
    """Editor markup back to marker text. Unknown tags are dropped."""
    text = html
    for pattern, replacement in _TO_MARKERS:
        text = pattern.sub(replacement, text)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text
