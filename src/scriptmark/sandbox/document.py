"""Wrapper document written into a sandbox surface.

Contains only the content and the measurement element around it. No host
styles are injected; the reset stylesheet is layout-neutral.
"""

from __future__ import annotations

import hashlib

CONTENT_ELEMENT_ID = "scriptmark-content"

RESET_CSS = (
    "html,body{margin:0;padding:0;overflow:hidden;}"
    "img{max-width:100%;height:auto;}"
    "ol,ul{list-style:none;margin:0;padding:0;}"
)


def wrapper_document(content: str) -> str:
    return (
        "<!doctype html><html><head>"
        '<meta charset="utf-8"/>'
        '<meta name="viewport" content="width=device-width, initial-scale=1"/>'
        f"<style>{RESET_CSS}</style>"
        "</head><body>"
        f'<div id="{CONTENT_ELEMENT_ID}">{content}</div>'
        "</body></html>"
    )


def fingerprint(content: str) -> str:
    return hashlib.sha256(content.encode("utf-8", "surrogatepass")).hexdigest()
