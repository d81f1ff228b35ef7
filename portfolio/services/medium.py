"""Cached access to the configured Medium feed for page renders and the API."""

from __future__ import annotations

from flask import current_app

from portfolio.services.cache import page_cache
from portfolio.services.feeds import FeedResult, load_feed_items

FEED_CACHE_PREFIX = "feed:"


def feed_settings() -> tuple[str, float, int]:
    config = current_app.config
    return (
        config.get("MEDIUM_RSS_URL") or "",
        float(config.get("FEED_TIMEOUT_SECONDS", 10)),
        int(config.get("FEED_CACHE_SECONDS", 3600)),
    )


def load_medium_posts() -> FeedResult:
    """Return feed items, reusing a successful result for the configured TTL.

    Failures are never cached so the next request retries the upstream feed.
    """

    url, timeout, ttl = feed_settings()
    key = f"{FEED_CACHE_PREFIX}{url}"
    cached = page_cache.get(key)
    if cached is not None:
        return cached

    result = load_feed_items(url, timeout=timeout)
    if result.ok:
        page_cache.set(key, result, ttl)
    return result


__all__ = ["FEED_CACHE_PREFIX", "feed_settings", "load_medium_posts"]
