"""Medium/RSS feed ingestion helpers."""

from .errors import CancelledError, ConfigError, FeedError, FetchError, ParseError
from .fetcher import fetch_document, validate_feed_url
from .pipeline import FeedItem, FeedResult, fetch_feed_items, load_feed_items, parse_feed

__all__ = [
    "CancelledError",
    "ConfigError",
    "FeedError",
    "FeedItem",
    "FeedResult",
    "FetchError",
    "ParseError",
    "fetch_document",
    "fetch_feed_items",
    "load_feed_items",
    "parse_feed",
    "validate_feed_url",
]
