"""Engines and sessions for the portfolio database.

One engine and session factory is kept per database URL. The first use of
an engine creates the user, profile, job history, certification and blog
post tables from :mod:`portfolio.models`.
"""

from __future__ import annotations

import os
from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


DEFAULT_DATABASE_URL = "sqlite:///portfolio.db"

_ENGINES: Dict[str, Engine] = {}
_SESSION_FACTORIES: Dict[str, sessionmaker] = {}


def _database_url(url: str | None) -> str:
    return url or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


def get_engine(url: str | None = None) -> Engine:
    resolved = _database_url(url)
    engine = _ENGINES.get(resolved)
    if engine is not None:
        return engine

    # Models import lazily so the app factory can import this module first.
    from portfolio.models import Base

    engine = create_engine(resolved)
    Base.metadata.create_all(engine)
    _ENGINES[resolved] = engine
    # Routes serialize records after commit, so loaded attributes must survive it.
    _SESSION_FACTORIES[resolved] = sessionmaker(bind=engine, expire_on_commit=False)
    return engine


def get_session(url: str | None = None) -> Session:
    resolved = _database_url(url)
    if resolved not in _SESSION_FACTORIES:
        get_engine(resolved)
    return _SESSION_FACTORIES[resolved]()


def dispose_engines() -> None:
    """Close pooled connections and forget every cached engine."""

    for engine in _ENGINES.values():
        engine.dispose()
    _ENGINES.clear()
    _SESSION_FACTORIES.clear()


__all__ = ["DEFAULT_DATABASE_URL", "dispose_engines", "get_engine", "get_session"]
