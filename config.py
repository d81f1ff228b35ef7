import os
from typing import Optional


DEFAULT_MEDIUM_RSS_URL = "https://medium.com/feed/@yourusername"


def _get_bool_env(name: str, default: bool = False) -> bool:
    """Return a boolean configuration value based on an environment variable."""

    value = os.getenv(name)
    if value is None:
        return default

    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read an environment variable returning ``default`` when unset or empty."""

    value = os.getenv(name)
    if value in (None, ""):
        return default
    return value


def _get_int_env(name: str, default: int) -> int:
    value = _get_env(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


class Config:
    SECRET_KEY = _get_env("SECRET_KEY", "change-me")
    DATABASE_URL = _get_env("DATABASE_URL", "sqlite:///portfolio.db")
    BASE_URL = _get_env("BASE_URL", "http://localhost:5000")
    MEDIUM_RSS_URL = _get_env("MEDIUM_RSS_URL", DEFAULT_MEDIUM_RSS_URL)
    FEED_TIMEOUT_SECONDS = _get_int_env("FEED_TIMEOUT_SECONDS", 10)
    FEED_CACHE_SECONDS = _get_int_env("FEED_CACHE_SECONDS", 3600)
    RATELIMIT_DEFAULT = _get_env("RATELIMIT_DEFAULT", "60/minute")
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = _get_bool_env("SESSION_COOKIE_SECURE", False)
    SESSION_COOKIE_SAMESITE = _get_env("SESSION_COOKIE_SAMESITE", "Lax")
