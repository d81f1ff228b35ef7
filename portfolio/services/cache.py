"""Process-wide page cache with path based invalidation."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

LOGGER = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600

# Public and admin paths that render data of each record kind.
PROFILE_PATHS = ("/", "/admin/profile")
JOB_HISTORY_PATHS = ("/", "/admin/job-history")
CERTIFICATION_PATHS = ("/", "/admin/certifications")
BLOG_PATHS = ("/blog", "/admin/blog")


@dataclass
class _Entry:
    value: Any
    expires_at: float


class PageCache:
    """Thread-safe TTL cache keyed by request path."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL_SECONDS) -> None:
        with self._lock:
            self._entries[key] = _Entry(value=value, expires_at=self._clock() + ttl)

    def get_or_set(self, key: str, factory: Callable[[], Any], ttl: int = DEFAULT_TTL_SECONDS) -> Any:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = factory()
        self.set(key, value, ttl)
        return value

    def mark_stale(self, *paths: str) -> None:
        """Drop cached renders for ``paths`` so the next read regenerates them."""

        with self._lock:
            for path in paths:
                self._entries.pop(path, None)
        LOGGER.info("Marked pages stale: %s", ", ".join(paths))

    def is_cached(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> Iterable[str]:
        with self._lock:
            return list(self._entries)


page_cache = PageCache()


def invalidate_blog(slug: str | None = None) -> None:
    paths = list(BLOG_PATHS)
    if slug:
        paths.append(f"/blog/{slug}")
    page_cache.mark_stale(*paths)


__all__ = [
    "BLOG_PATHS",
    "CERTIFICATION_PATHS",
    "DEFAULT_TTL_SECONDS",
    "JOB_HISTORY_PATHS",
    "PROFILE_PATHS",
    "PageCache",
    "invalidate_blog",
    "page_cache",
]
