import re

import pytest

from portfolio.services.feeds import pipeline
from portfolio.services.feeds import FeedItem, FetchError, load_feed_items, parse_feed
from portfolio.services.feeds.pipeline import fetch_feed_items

from tests.feed_samples import FEED_URL, MEDIUM_FEED, FakeResponse


def test_parse_feed_returns_items_in_source_order():
    items = parse_feed(MEDIUM_FEED)
    assert [item.link for item in items] == [
        "https://medium.example.com/@tester/scaling-teams-1",
        "https://medium.example.com/@tester/second-post-2",
    ]


def test_parse_feed_normalizes_fields():
    first, second = parse_feed(MEDIUM_FEED)

    assert first.title == "Scaling Teams & Culture"
    assert first.published_at == "Mon, 10 Feb 2025 10:00:00 GMT"
    assert first.thumbnail_url == "https://cdn.example.com/cover-1.png"
    assert first.categories == ["leadership", "hr"]
    assert first.excerpt == "Growing a team is hard...."

    assert second.title == "Second Post"
    assert second.thumbnail_url is None
    assert second.categories == ["leadership"]
    assert second.excerpt == "No images here...."


def test_excerpts_never_contain_markup_or_entities():
    for item in parse_feed(MEDIUM_FEED):
        assert not re.search(r"<[^>]*>", item.excerpt)
        assert not re.search(r"&[#A-Za-z0-9]+;", item.excerpt)
        assert item.excerpt.endswith("...")


def test_parse_feed_is_idempotent():
    assert parse_feed(MEDIUM_FEED) == parse_feed(MEDIUM_FEED)


def test_title_entities_are_decoded_not_stripped():
    document = "<item><title>&amp;Co&lt;/b&gt;</title><link>https://x</link></item>"
    (item,) = parse_feed(document)
    assert item.title == "&Co</b>"


def test_missing_link_yields_empty_string():
    document = (
        "<item><title>No link</title><description>d</description></item>"
        "<item><title>Linked</title><link>https://x</link></item>"
    )
    items = parse_feed(document)
    assert len(items) == 2
    assert items[0].link == ""
    assert items[1].link == "https://x"


def test_missing_fields_default_to_empty_values():
    (item,) = parse_feed("<item></item>")
    assert item == FeedItem(
        title="", link="", published_at="", excerpt="...", thumbnail_url=None, categories=[]
    )


def test_zero_entry_document_yields_empty_list():
    assert parse_feed("<rss><channel></channel></rss>") == []


def test_failing_entry_is_skipped(monkeypatch):
    original = pipeline.extract_thumbnail

    def flaky(content):
        if "boom" in content:
            raise RuntimeError("broken entry")
        return original(content)

    monkeypatch.setattr(pipeline, "extract_thumbnail", flaky)
    document = (
        "<item><title>One</title><description>ok</description></item>"
        "<item><title>Two</title><description>boom</description></item>"
        "<item><title>Three</title><description>ok</description></item>"
    )
    assert [item.title for item in parse_feed(document)] == ["One", "Three"]


def test_all_entries_failing_returns_empty_list(monkeypatch):
    def broken(_content):
        raise RuntimeError("nope")

    monkeypatch.setattr(pipeline, "extract_thumbnail", broken)
    assert parse_feed(MEDIUM_FEED) == []


def test_to_dict_matches_public_shape():
    first, second = parse_feed(MEDIUM_FEED)
    assert first.to_dict() == {
        "title": "Scaling Teams & Culture",
        "link": "https://medium.example.com/@tester/scaling-teams-1",
        "pubDate": "Mon, 10 Feb 2025 10:00:00 GMT",
        "description": "Growing a team is hard....",
        "thumbnail": "https://cdn.example.com/cover-1.png",
        "categories": ["leadership", "hr"],
    }
    assert "thumbnail" not in second.to_dict()


def test_fetch_feed_items_uses_single_request(fake_feed):
    calls, _state = fake_feed
    items = fetch_feed_items(FEED_URL)
    assert len(items) == 2
    assert calls == [FEED_URL]


def test_fetch_feed_items_propagates_fetch_errors(fake_feed):
    _calls, state = fake_feed
    state["response"] = FakeResponse("unavailable", status_code=503)
    with pytest.raises(FetchError):
        fetch_feed_items(FEED_URL)


def test_load_feed_items_converts_failure_into_empty_result(fake_feed):
    _calls, state = fake_feed
    state["response"] = FakeResponse("", status_code=500)
    result = load_feed_items(FEED_URL)
    assert result.items == []
    assert not result.ok
    assert "500" in result.error


def test_load_feed_items_success(fake_feed):
    result = load_feed_items(FEED_URL)
    assert result.ok
    assert [item.title for item in result.items] == ["Scaling Teams & Culture", "Second Post"]
