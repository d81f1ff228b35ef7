from __future__ import annotations

import os
import time
from typing import Any, Mapping, Optional

from flask import Flask, Response, g, jsonify, redirect, request, url_for
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from sqlalchemy.exc import SQLAlchemyError

from portfolio.logging import configure_logging

from portfolio.blueprints.admin import admin_bp
from portfolio.blueprints.api import (
    api_bp,
    blog_api_bp,
    certifications_api_bp,
    jobs_api_bp,
    profile_api_bp,
)
from portfolio.blueprints.auth import auth_bp
from portfolio.blueprints.ui import ui_bp
from portfolio.extensions import csrf, limiter, login_manager
from portfolio.security import get_user_by_id

try:  # pragma: no cover - optional dependency
    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration
except Exception:  # pragma: no cover - optional dependency
    sentry_sdk = None

REQUEST_COUNT = Counter(
    "flask_app_requests_total", "Total HTTP requests", ["method", "path", "status_code"]
)
REQUEST_LATENCY = Histogram(
    "flask_app_request_latency_seconds", "Request latency", ["endpoint"]
)


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    configure_logging()
    dsn = os.getenv("SENTRY_DSN")
    if sentry_sdk and dsn:
        sentry_sdk.init(dsn=dsn, integrations=[FlaskIntegration()])

    app = Flask(__name__)
    app.config.from_object("config.Config")

    env_database_url = os.getenv("DATABASE_URL")
    if env_database_url:
        app.config["DATABASE_URL"] = env_database_url
    if overrides:
        app.config.update(overrides)

    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)
    login_manager.login_view = "auth.login"

    @login_manager.user_loader
    def load_user(user_id: str):
        return get_user_by_id(user_id, app.config.get("DATABASE_URL"))

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(profile_api_bp, url_prefix="/api/profile")
    app.register_blueprint(jobs_api_bp, url_prefix="/api/job-history")
    app.register_blueprint(certifications_api_bp, url_prefix="/api/certifications")
    app.register_blueprint(blog_api_bp, url_prefix="/api/blog")
    app.register_blueprint(ui_bp)
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(admin_bp)

    def _wants_json() -> bool:
        return request.path.startswith("/api/") or request.is_json

    @app.errorhandler(401)
    def _unauthorized(_error):
        if _wants_json():
            return jsonify({"error": "Unauthorized"}), 401
        return redirect(url_for("auth.login", next=request.path))

    @app.errorhandler(404)
    def _not_found(_error):
        if _wants_json():
            return jsonify({"error": "Not found"}), 404
        return "Not found", 404

    @app.errorhandler(SQLAlchemyError)
    def _database_error(error: SQLAlchemyError):
        app.logger.exception("Database error on %s %s", request.method, request.path)
        return jsonify({"error": "database error"}), 500

    @app.before_request
    def _start_timer() -> None:  # pragma: no cover - request timing
        g.start_time = time.perf_counter()

    @app.after_request
    def _record_request(
        response: Response,
    ) -> Response:  # pragma: no cover - request timing
        elapsed = time.perf_counter() - getattr(g, "start_time", time.perf_counter())
        endpoint = request.endpoint or "unknown"
        REQUEST_LATENCY.labels(endpoint).observe(elapsed)
        REQUEST_COUNT.labels(request.method, request.path, response.status_code).inc()
        return response

    @app.route("/metrics")
    def metrics() -> Response:
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)

    @app.route("/health")
    def health() -> tuple[str, int]:
        return "ok", 200

    return app
