"""Pattern based extraction of entries and fields from RSS documents.

This is a best-effort scanner, not a validating XML parser: malformed
documents simply yield fewer matches.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List

ITEM_TAG = "item"
CONTENT_FIELD = "content:encoded"
SUMMARY_FIELD = "description"
CATEGORY_FIELD = "category"

_CDATA_RE = re.compile(r"^<!\[CDATA\[([\s\S]*?)\]\]>$")


@lru_cache(maxsize=32)
def _element_pattern(name: str) -> re.Pattern[str]:
    # Attributes are tolerated, the body match is non-greedy.
    tag = re.escape(name)
    return re.compile(rf"<{tag}(?:\s[^>]*)?>([\s\S]*?)</{tag}\s*>")


def _unwrap_cdata(text: str) -> str:
    match = _CDATA_RE.match(text)
    if match:
        return match.group(1).strip()
    return text


def extract_items(document: str, tag: str = ITEM_TAG) -> List[str]:
    """Return every ``<tag>...</tag>`` fragment of ``document`` in document order."""

    if not document:
        return []
    return [match.group(0) for match in _element_pattern(tag).finditer(document)]


def extract_field(fragment: str, name: str) -> str:
    """Return the trimmed text of the first ``name`` element, or ``""``."""

    match = _element_pattern(name).search(fragment)
    if match is None:
        return ""
    return _unwrap_cdata(match.group(1).strip())


def extract_all(fragment: str, name: str) -> List[str]:
    """Return the trimmed text of every ``name`` element in order, duplicates kept."""

    return [
        _unwrap_cdata(match.group(1).strip())
        for match in _element_pattern(name).finditer(fragment)
    ]


def resolve_content(fragment: str) -> str:
    """Prefer the full content field, then the summary, then an empty string."""

    return extract_field(fragment, CONTENT_FIELD) or extract_field(fragment, SUMMARY_FIELD)


__all__ = [
    "CATEGORY_FIELD",
    "CONTENT_FIELD",
    "ITEM_TAG",
    "SUMMARY_FIELD",
    "extract_all",
    "extract_field",
    "extract_items",
    "resolve_content",
]
