"""Text normalization for feed content: thumbnails, markup stripping and excerpts."""

from __future__ import annotations

import html
import re
from typing import Optional

EXCERPT_LENGTH = 200
TRUNCATION_MARKER = "..."

_IMG_SRC_RE = re.compile(r"<img[^>]+src=\"([^\">]+)\"")
_TAG_RE = re.compile(r"<[^>]*>")
# Only element shapes: "a < b" and "<3" are text, "<p>" and "</p>" are markup.
_ELEMENT_RE = re.compile(r"</?[A-Za-z][^<>]*>")

# Order matters: "&amp;" is replaced first so double-escaped text decodes fully.
_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&nbsp;", " "),
)


def extract_thumbnail(content: str) -> Optional[str]:
    """Return the ``src`` of the first embedded image in raw ``content``."""

    match = _IMG_SRC_RE.search(content or "")
    return match.group(1) if match else None


def strip_markup(text: str) -> str:
    return _TAG_RE.sub("", text or "").replace("&nbsp;", " ").strip()


def decode_entities(text: str) -> str:
    decoded = text or ""
    for entity, replacement in _ENTITIES:
        decoded = decoded.replace(entity, replacement)
    return decoded


def unescape_text(text: str) -> str:
    """Decode every layer of character references in ``text``.

    Each layer may reveal escaped markup (``&lt;p&gt;``); element shapes it
    reveals are dropped before the next layer is decoded. Every pass that
    changes the text shortens it, so the loop ends.
    """

    previous = None
    current = text or ""
    while current != previous:
        previous = current
        current = _ELEMENT_RE.sub("", html.unescape(current))
    return current.replace("\xa0", " ")


def make_excerpt(text: str, length: int = EXCERPT_LENGTH) -> str:
    """Cut ``text`` to ``length`` characters and always append the marker.

    The marker is appended even when nothing was cut; consumers rely on the
    trailing ``"..."``.
    """

    return (text or "")[:length] + TRUNCATION_MARKER


def summarize(description: str) -> str:
    """Build a plain-text excerpt from an HTML ``description``."""

    plain = unescape_text(strip_markup(description)).strip()
    return make_excerpt(plain)


__all__ = [
    "EXCERPT_LENGTH",
    "TRUNCATION_MARKER",
    "decode_entities",
    "extract_thumbnail",
    "make_excerpt",
    "strip_markup",
    "summarize",
    "unescape_text",
]
