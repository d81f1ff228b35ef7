"""HTTP retrieval of syndication documents."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

import requests

from .errors import CancelledError, ConfigError, FetchError

LOGGER = logging.getLogger(__name__)

USER_AGENT = "PortfolioSiteBot/1.0 (+https://github.com/portfolio-site)"
DEFAULT_TIMEOUT = 10.0


def validate_feed_url(url: str | None) -> str:
    """Return ``url`` stripped, raising :class:`ConfigError` unless it is absolute HTTP(S)."""

    if not url or not url.strip():
        raise ConfigError("feed URL is not configured")
    candidate = url.strip()
    parsed = urlparse(candidate)
    if parsed.scheme.lower() not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(f"feed URL must be an absolute http(s) URL: {candidate!r}")
    return candidate


def fetch_document(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> str:
    """Fetch ``url`` and return the response body text unmodified.

    No retries are attempted. A timeout surfaces as :class:`CancelledError`,
    any other transport failure or non-2xx status as :class:`FetchError`.
    """

    target = validate_feed_url(url)
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/rss+xml, application/xml;q=0.9, */*;q=0.8",
    }
    client = session or requests

    try:
        response = client.get(target, headers=headers, timeout=timeout)
    except requests.Timeout as exc:
        LOGGER.warning("Feed fetch for %s timed out after %ss", target, timeout)
        raise CancelledError(f"fetch of {target} timed out", url=target) from exc
    except requests.RequestException as exc:
        LOGGER.warning("Feed fetch for %s failed: %s", target, exc)
        raise FetchError(f"fetch of {target} failed: {exc}", url=target) from exc

    if not 200 <= response.status_code < 300:
        LOGGER.warning("Feed %s returned HTTP %s", target, response.status_code)
        raise FetchError(
            f"feed {target} returned HTTP {response.status_code}",
            url=target,
            status_code=response.status_code,
        )

    return response.text


__all__ = ["DEFAULT_TIMEOUT", "USER_AGENT", "fetch_document", "validate_feed_url"]
