"""Feed ingestion pipeline: fetch, extract, parse, normalize and assemble."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests
from prometheus_client import Counter

from .errors import FeedError, ParseError
from .fetcher import DEFAULT_TIMEOUT, fetch_document
from .normalize import decode_entities, extract_thumbnail, summarize
from .parser import (
    CATEGORY_FIELD,
    SUMMARY_FIELD,
    extract_all,
    extract_field,
    extract_items,
    resolve_content,
)

LOGGER = logging.getLogger(__name__)

FEED_FETCH_TOTAL = Counter(
    "feed_fetch_total", "Feed pipeline invocations by outcome", ["outcome"]
)
FEED_ENTRIES_SKIPPED = Counter(
    "feed_entries_skipped_total", "Feed entries dropped because they failed to parse"
)


@dataclass
class FeedItem:
    title: str
    link: str
    published_at: str
    excerpt: str
    thumbnail_url: Optional[str] = None
    categories: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "title": self.title,
            "link": self.link,
            "pubDate": self.published_at,
            "description": self.excerpt,
            "categories": list(self.categories),
        }
        if self.thumbnail_url is not None:
            payload["thumbnail"] = self.thumbnail_url
        return payload


@dataclass
class FeedResult:
    """Caller-facing outcome: items on success, an error message otherwise."""

    items: List[FeedItem] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_entry(fragment: str) -> FeedItem:
    """Turn one ``<item>`` fragment into a :class:`FeedItem`."""

    try:
        content = resolve_content(fragment)
        return FeedItem(
            title=decode_entities(extract_field(fragment, "title")),
            link=extract_field(fragment, "link"),
            published_at=extract_field(fragment, "pubDate"),
            # Excerpts come from the summary field, not the resolved content.
            excerpt=summarize(extract_field(fragment, SUMMARY_FIELD)),
            thumbnail_url=extract_thumbnail(content),
            categories=extract_all(fragment, CATEGORY_FIELD),
        )
    except Exception as exc:
        raise ParseError(f"could not parse feed entry: {exc}") from exc


def parse_feed(document: str) -> List[FeedItem]:
    """Parse every entry of ``document``, skipping entries that fail."""

    items: List[FeedItem] = []
    for index, fragment in enumerate(extract_items(document)):
        try:
            items.append(parse_entry(fragment))
        except ParseError as exc:
            FEED_ENTRIES_SKIPPED.inc()
            LOGGER.warning("Skipping feed entry %d: %s", index, exc)
    return items


def fetch_feed_items(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> List[FeedItem]:
    """Fetch ``url`` and return its entries; fetch-level errors propagate."""

    document = fetch_document(url, timeout=timeout, session=session)
    return parse_feed(document)


def load_feed_items(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> FeedResult:
    """Run the pipeline for a page render, converting failures into a result."""

    try:
        items = fetch_feed_items(url, timeout=timeout, session=session)
    except FeedError as exc:
        FEED_FETCH_TOTAL.labels("error").inc()
        LOGGER.error("Feed pipeline for %s failed: %s", url, exc)
        return FeedResult(items=[], error=str(exc))

    FEED_FETCH_TOTAL.labels("ok").inc()
    LOGGER.info("Loaded %d feed entries from %s", len(items), url)
    return FeedResult(items=items)


__all__ = [
    "FeedItem",
    "FeedResult",
    "fetch_feed_items",
    "load_feed_items",
    "parse_entry",
    "parse_feed",
]
