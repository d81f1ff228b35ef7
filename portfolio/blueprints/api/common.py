from __future__ import annotations

import os

from flask import current_app, jsonify

from portfolio.db import get_session


def database_url() -> str | None:
    config_url = current_app.config.get("DATABASE_URL")
    env_url = os.getenv("DATABASE_URL")
    if config_url:
        return config_url
    return env_url


def open_session():
    return get_session(database_url())


def error_response(message: str, status: int, errors: list[str] | None = None):
    payload: dict = {"error": message}
    if errors:
        payload["errors"] = errors
    return jsonify(payload), status


__all__ = ["database_url", "error_response", "open_session"]
