"""Back-office read views; the screens themselves are served as JSON."""

from __future__ import annotations

from typing import Any, Callable, Dict

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import func, select

from portfolio.blueprints.api.common import open_session
from portfolio.models import BlogPost, Certification, JobHistory
from portfolio.security import admin_required
from portfolio.services.cache import page_cache
from portfolio.services.content import (
    get_profile,
    list_certifications,
    list_jobs,
    list_posts,
    serialize_certification,
    serialize_job,
    serialize_post,
    serialize_profile,
)

admin_bp = Blueprint("admin", __name__)


def _cached_payload(builder: Callable[[Any], Dict[str, Any]]):
    ttl = int(current_app.config.get("FEED_CACHE_SECONDS", 3600))

    def _build() -> Dict[str, Any]:
        session = open_session()
        try:
            return builder(session)
        finally:
            session.close()

    return jsonify(page_cache.get_or_set(request.path, _build, ttl)), 200


@admin_bp.get("/admin")
@admin_required
def dashboard():
    session = open_session()
    try:
        counts = {
            "jobs": session.scalar(select(func.count(JobHistory.id))) or 0,
            "certifications": session.scalar(select(func.count(Certification.id))) or 0,
            "posts": session.scalar(select(func.count(BlogPost.id))) or 0,
            "published_posts": session.scalar(
                select(func.count(BlogPost.id)).where(BlogPost.published.is_(True))
            )
            or 0,
        }
        profile = get_profile(session)
        return jsonify({"status": "admin ok", "profile": profile is not None, "counts": counts}), 200
    finally:
        session.close()


@admin_bp.get("/admin/profile")
@admin_required
def profile_screen():
    def build(session):
        profile = get_profile(session)
        return {"profile": serialize_profile(profile) if profile else None}

    return _cached_payload(build)


@admin_bp.get("/admin/job-history")
@admin_required
def job_history_screen():
    return _cached_payload(lambda session: {"jobs": [serialize_job(job) for job in list_jobs(session)]})


@admin_bp.get("/admin/certifications")
@admin_required
def certifications_screen():
    return _cached_payload(
        lambda session: {
            "certifications": [serialize_certification(item) for item in list_certifications(session)]
        }
    )


@admin_bp.get("/admin/blog")
@admin_required
def blog_screen():
    return _cached_payload(
        lambda session: {
            "posts": [
                serialize_post(post, include_content=False)
                for post in list_posts(session, include_unpublished=True)
            ]
        }
    )


__all__ = ["admin_bp"]
