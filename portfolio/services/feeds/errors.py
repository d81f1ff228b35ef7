"""Error taxonomy for feed ingestion."""

from __future__ import annotations


class FeedError(Exception):
    """Base class for all feed ingestion failures."""


class ConfigError(FeedError):
    """The configured feed URL is missing or malformed."""


class FetchError(FeedError):
    """The feed document could not be retrieved."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class CancelledError(FetchError):
    """The fetch was aborted by the caller's timeout."""


class ParseError(FeedError):
    """A single entry fragment could not be parsed."""


__all__ = ["CancelledError", "ConfigError", "FeedError", "FetchError", "ParseError"]
