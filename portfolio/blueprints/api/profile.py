from __future__ import annotations

from flask import Blueprint, jsonify, request

from portfolio.extensions import csrf
from portfolio.security import admin_required
from portfolio.services.content import (
    get_profile,
    invalidate_profile,
    serialize_profile,
    upsert_profile,
)

from .common import error_response, open_session

profile_api_bp = Blueprint("api_profile", __name__)


@profile_api_bp.get("")
def get_profile_endpoint():
    session = open_session()
    try:
        profile = get_profile(session)
        return jsonify(serialize_profile(profile) if profile else None), 200
    finally:
        session.close()


@profile_api_bp.put("")
@csrf.exempt
@admin_required
def update_profile_endpoint():
    session = open_session()
    try:
        profile, errors = upsert_profile(session, request.get_json(silent=True) or {})
        if errors:
            session.rollback()
            return error_response(errors[0], 400, errors)
        session.commit()
        invalidate_profile()
        return jsonify(serialize_profile(profile)), 200
    finally:
        session.close()


__all__ = ["profile_api_bp"]
