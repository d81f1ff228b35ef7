import json
import logging

from portfolio.logging import JsonFormatter


def test_api_health_endpoint(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "database": True, "feed_configured": True}


def test_metrics_endpoint_exposes_feed_counters(client, fake_feed):
    client.get("/api/blog/medium-rss")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "flask_app_requests_total" in body
    assert "feed_fetch_total" in body


def test_json_formatter_includes_request_path(app):
    record = logging.LogRecord("portfolio.test", logging.WARNING, __file__, 1, "feed %s", ("down",), None)
    with app.test_request_context("/blog"):
        line = json.loads(JsonFormatter().format(record))
    assert line["message"] == "feed down"
    assert line["level"] == "WARNING"
    assert line["path"] == "/blog"

    outside = json.loads(JsonFormatter().format(record))
    assert "path" not in outside
