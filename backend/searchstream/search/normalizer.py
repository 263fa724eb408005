"""Cleanup of raw adapter output into canonical result fields."""

from __future__ import annotations

import html
import re
from urllib.parse import unquote

# DuckDuckGo wraps result links as //duckduckgo.com/l/?uddg=<encoded target>&rut=...
_REDIRECT_TARGET = re.compile(r"uddg=([^&]*)")
_WHITESPACE = re.compile(r"\s+")
_TAG = re.compile(r"</?[A-Za-z][^>]*>")

# Applied in order, so "&amp;lt;" ends up as "<". Anything left goes through html.unescape.
_ENTITIES = (
    ("&quot;", '"'),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&#39;", "'"),
)


def clean_url(url: str) -> str:
    """Return the real destination of a redirect-wrapped URL, or the URL unchanged."""
    if not url:
        return url
    match = _REDIRECT_TARGET.search(url)
    if not match:
        return url
    return unquote(match.group(1))


def clean_text(text: str | None) -> str:
    """Drop inline markup, decode HTML entities and collapse whitespace."""
    if not text:
        return ""
    text = _TAG.sub("", text)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    text = html.unescape(text)
    return _WHITESPACE.sub(" ", text).strip()
