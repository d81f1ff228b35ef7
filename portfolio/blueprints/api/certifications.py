from __future__ import annotations

from flask import Blueprint, jsonify, request

from portfolio.extensions import csrf
from portfolio.models import Certification
from portfolio.security import admin_required
from portfolio.services.content import (
    create_certification,
    invalidate_certifications,
    list_certifications,
    serialize_certification,
    update_certification,
)

from .common import error_response, open_session

certifications_api_bp = Blueprint("api_certifications", __name__)


@certifications_api_bp.get("")
def list_certifications_endpoint():
    session = open_session()
    try:
        certifications = list_certifications(session)
        return jsonify([serialize_certification(item) for item in certifications]), 200
    finally:
        session.close()


@certifications_api_bp.post("")
@csrf.exempt
@admin_required
def create_certification_endpoint():
    session = open_session()
    try:
        certification, errors = create_certification(session, request.get_json(silent=True) or {})
        if errors:
            session.rollback()
            return error_response(errors[0], 400, errors)
        session.commit()
        invalidate_certifications()
        return jsonify(serialize_certification(certification)), 201
    finally:
        session.close()


@certifications_api_bp.put("/<int:certification_id>")
@csrf.exempt
@admin_required
def update_certification_endpoint(certification_id: int):
    session = open_session()
    try:
        certification = session.get(Certification, certification_id)
        if certification is None:
            return error_response("certification not found", 404)
        errors = update_certification(certification, request.get_json(silent=True) or {})
        if errors:
            session.rollback()
            return error_response(errors[0], 400, errors)
        session.commit()
        invalidate_certifications()
        return jsonify(serialize_certification(certification)), 200
    finally:
        session.close()


@certifications_api_bp.delete("/<int:certification_id>")
@csrf.exempt
@admin_required
def delete_certification_endpoint(certification_id: int):
    session = open_session()
    try:
        certification = session.get(Certification, certification_id)
        if certification is None:
            return error_response("certification not found", 404)
        session.delete(certification)
        session.commit()
        invalidate_certifications()
        return jsonify({"message": "Certification deleted"}), 200
    finally:
        session.close()


__all__ = ["certifications_api_bp"]
