from __future__ import annotations

import logging

from flask import current_app
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .common import open_session

LOGGER = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Liveness of the site and its database."""

    status: str = "ok"
    database: bool = True
    feed_configured: bool = False


def _database_reachable() -> bool:
    session = open_session()
    try:
        session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        LOGGER.exception("Health check could not reach the database")
        return False
    finally:
        session.close()


def health() -> tuple[dict, int]:
    reachable = _database_reachable()
    payload = HealthResponse(
        status="ok" if reachable else "degraded",
        database=reachable,
        feed_configured=bool(current_app.config.get("MEDIUM_RSS_URL")),
    )
    return payload.model_dump(), 200 if reachable else 503


__all__ = ["HealthResponse", "health"]
