from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user
from sqlalchemy.exc import IntegrityError

from portfolio.extensions import csrf
from portfolio.security import admin_required
from portfolio.services.content import (
    create_post,
    get_post,
    invalidate_blog,
    list_posts,
    serialize_post,
    update_post,
)
from portfolio.services.medium import load_medium_posts

from .common import error_response, open_session

LOGGER = logging.getLogger(__name__)

blog_api_bp = Blueprint("api_blog", __name__)


def _include_unpublished() -> bool:
    flag = (request.args.get("includeUnpublished") or "").strip().lower() == "true"
    return flag and current_user.is_authenticated


@blog_api_bp.get("")
def list_posts_endpoint():
    session = open_session()
    try:
        posts = list_posts(session, include_unpublished=_include_unpublished())
        return jsonify([serialize_post(post, include_content=False) for post in posts]), 200
    finally:
        session.close()


@blog_api_bp.post("")
@csrf.exempt
@admin_required
def create_post_endpoint():
    session = open_session()
    try:
        post, errors = create_post(session, request.get_json(silent=True) or {})
        if errors:
            session.rollback()
            return error_response(errors[0], 400, errors)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            return error_response("a post with this slug already exists", 409)
        invalidate_blog(post.slug)
        return jsonify(serialize_post(post)), 201
    finally:
        session.close()


@blog_api_bp.get("/medium-rss")
def medium_rss_endpoint():
    result = load_medium_posts()
    if not result.ok:
        return jsonify({"error": "Failed to fetch Medium posts", "posts": []}), 500
    return jsonify([item.to_dict() for item in result.items]), 200


@blog_api_bp.get("/<slug>")
def get_post_endpoint(slug: str):
    session = open_session()
    try:
        post = get_post(session, slug)
        if post is None or (not post.published and not current_user.is_authenticated):
            return error_response("Post not found", 404)
        return jsonify(serialize_post(post)), 200
    finally:
        session.close()


@blog_api_bp.put("/<slug>")
@csrf.exempt
@admin_required
def update_post_endpoint(slug: str):
    session = open_session()
    try:
        post = get_post(session, slug)
        if post is None:
            return error_response("Post not found", 404)
        errors = update_post(post, request.get_json(silent=True) or {})
        if errors:
            session.rollback()
            return error_response(errors[0], 400, errors)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            return error_response("a post with this slug already exists", 409)
        invalidate_blog(slug)
        if post.slug != slug:
            invalidate_blog(post.slug)
        return jsonify(serialize_post(post)), 200
    finally:
        session.close()


@blog_api_bp.delete("/<slug>")
@csrf.exempt
@admin_required
def delete_post_endpoint(slug: str):
    session = open_session()
    try:
        post = get_post(session, slug)
        if post is None:
            return error_response("Post not found", 404)
        session.delete(post)
        session.commit()
        invalidate_blog(slug)
        LOGGER.info("Deleted blog post %s", slug)
        return jsonify({"message": "Blog post deleted"}), 200
    finally:
        session.close()


__all__ = ["blog_api_bp"]
