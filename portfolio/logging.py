import json
import logging
import os
from datetime import datetime, timezone
from typing import Any

from flask import has_request_context, request


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line, tagged with the request path."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if has_request_context():
            log_record["method"] = request.method
            log_record["path"] = request.path
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def configure_logging(level: str | None = None) -> None:
    """Send root logger output to stderr as JSON at ``LOG_LEVEL`` (default INFO)."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
