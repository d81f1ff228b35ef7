from __future__ import annotations

import logging
from typing import Callable

from flask import Blueprint, Response, abort, current_app, render_template, request

from portfolio.blueprints.api.common import open_session
from portfolio.services.cache import page_cache
from portfolio.services.content import (
    get_post,
    get_profile,
    list_certifications,
    list_jobs,
)
from portfolio.services.feeds import FeedError, fetch_document
from portfolio.services.medium import feed_settings, load_medium_posts

LOGGER = logging.getLogger(__name__)

ui_bp = Blueprint("ui", __name__)

RECENT_POSTS_ON_HOME = 3

_UNAVAILABLE_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Blog RSS Feed</title>
    <description>RSS feed temporarily unavailable</description>
    <link>{base_url}</link>
  </channel>
</rss>"""


def _render_cached(render: Callable[[], tuple[str, bool]]) -> str:
    """Serve the cached render for the current path or produce and store one.

    ``render`` returns the HTML and whether it may be cached.
    """

    cached = page_cache.get(request.path)
    if cached is not None:
        return cached
    html, cacheable = render()
    if cacheable:
        page_cache.set(request.path, html, int(current_app.config.get("FEED_CACHE_SECONDS", 3600)))
    return html


@ui_bp.route("/")
def home():
    def render() -> tuple[str, bool]:
        session = open_session()
        try:
            profile = get_profile(session)
            jobs = list_jobs(session)
            certifications = list_certifications(session)
        finally:
            session.close()
        feed = load_medium_posts()
        html = render_template(
            "ui/home.html",
            profile=profile,
            jobs=jobs,
            certifications=certifications,
            recent_posts=feed.items[:RECENT_POSTS_ON_HOME],
        )
        return html, feed.ok

    return _render_cached(render)


@ui_bp.route("/blog")
def blog():
    def render() -> tuple[str, bool]:
        feed = load_medium_posts()
        feed_url, _timeout, _ttl = feed_settings()
        html = render_template("ui/blog.html", posts=feed.items, feed_url=feed_url)
        return html, feed.ok

    return _render_cached(render)


@ui_bp.route("/blog/<slug>")
def blog_post(slug: str):
    def render() -> tuple[str, bool]:
        session = open_session()
        try:
            post = get_post(session, slug)
        finally:
            session.close()
        if post is None or not post.published:
            abort(404)
        return render_template("ui/post.html", post=post), True

    return _render_cached(render)


@ui_bp.route("/feed.xml")
def feed_xml() -> Response:
    url, timeout, _ttl = feed_settings()
    try:
        document = fetch_document(url, timeout=timeout)
    except FeedError as exc:
        LOGGER.error("Error fetching RSS feed %s: %s", url, exc)
        base_url = current_app.config.get("BASE_URL") or request.host_url.rstrip("/")
        return Response(
            _UNAVAILABLE_FEED.format(base_url=base_url),
            status=500,
            mimetype="application/xml",
        )

    return Response(
        document,
        mimetype="application/xml",
        headers={"Cache-Control": "public, max-age=3600, s-maxage=3600"},
    )


__all__ = ["ui_bp"]
