import sys
from pathlib import Path

# Ensure the root of the repository is on PYTHONPATH
sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from portfolio import create_app
from portfolio.db import dispose_engines, get_session
from portfolio.security import create_user
from portfolio.services.cache import page_cache

from tests.feed_samples import FEED_URL, MEDIUM_FEED, FakeResponse
from tests.helpers import ADMIN


@pytest.fixture(autouse=True)
def _clear_page_cache():
    page_cache.clear()
    yield
    page_cache.clear()


@pytest.fixture()
def db_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'portfolio.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    session = get_session(url)
    try:
        create_user(session, ADMIN["email"], ADMIN["password"], name="Admin")
        session.commit()
    finally:
        session.close()
    yield url
    dispose_engines()


@pytest.fixture()
def app(db_url):
    return create_app(
        {
            "TESTING": True,
            "WTF_CSRF_ENABLED": False,
            "RATELIMIT_ENABLED": False,
            "DATABASE_URL": db_url,
            "MEDIUM_RSS_URL": FEED_URL,
        }
    )


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def fake_feed(monkeypatch):
    """Serve ``MEDIUM_FEED`` for every outgoing request and record the calls."""

    from portfolio.services.feeds import fetcher

    calls = []
    state = {"response": FakeResponse(MEDIUM_FEED)}

    def fake_get(url, *args, **kwargs):
        calls.append(url)
        response = state["response"]
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(fetcher.requests, "get", fake_get)
    return calls, state
