from __future__ import annotations

import logging
from urllib.parse import urljoin, urlparse

from flask import Blueprint, jsonify, redirect, render_template, request, url_for
from flask_login import current_user, login_required, login_user, logout_user

from portfolio.blueprints.api.common import open_session
from portfolio.extensions import csrf, limiter
from portfolio.security import authenticate

LOGGER = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


def _is_safe_redirect(target: str) -> bool:
    if not target:
        return False
    ref_url = urlparse(request.host_url)
    test_url = urlparse(urljoin(request.host_url, target))
    return test_url.scheme in {"http", "https"} and ref_url.netloc == test_url.netloc


def _authenticate(email: str | None, password: str | None):
    session = open_session()
    try:
        return authenticate(session, email, password)
    finally:
        session.close()


@auth_bp.route("/login", methods=["GET", "POST"])
@csrf.exempt
@limiter.limit("10/minute", methods=["POST"])
def login():
    if request.method == "GET":
        if current_user.is_authenticated:
            return redirect(url_for("admin.dashboard"))
        next_url = request.args.get("next")
        return render_template("ui/login.html", error=None, next_url=next_url)

    if request.is_json:
        data = request.get_json(silent=True) or {}
        user = _authenticate(data.get("email"), data.get("password"))
        if user is None:
            LOGGER.warning("Rejected login for %s", data.get("email"))
            return jsonify({"error": "invalid credentials"}), 401
        login_user(user)
        return jsonify({"status": "logged_in"}), 200

    email = (request.form.get("email") or "").strip()
    password = request.form.get("password") or ""
    next_url = request.form.get("next") or request.args.get("next")
    user = _authenticate(email, password)
    if user is None:
        LOGGER.warning("Rejected login for %s", email)
        return (
            render_template(
                "ui/login.html",
                error="Invalid email or password.",
                next_url=next_url,
            ),
            401,
        )

    login_user(user)
    if next_url and _is_safe_redirect(next_url):
        return redirect(next_url)
    return redirect(url_for("admin.dashboard"))


@auth_bp.post("/logout")
@csrf.exempt
@login_required
def logout():
    logout_user()
    if request.is_json:
        return jsonify({"status": "logged_out"}), 200
    next_url = request.form.get("next") or request.args.get("next")
    if next_url and _is_safe_redirect(next_url):
        return redirect(next_url)
    return redirect(url_for("auth.login"))


__all__ = ["auth_bp"]
