from __future__ import annotations

from flask import Blueprint, jsonify, request

from portfolio.extensions import csrf
from portfolio.models import JobHistory
from portfolio.security import admin_required
from portfolio.services.content import (
    create_job,
    invalidate_jobs,
    list_jobs,
    serialize_job,
    update_job,
)

from .common import error_response, open_session

jobs_api_bp = Blueprint("api_jobs", __name__)


@jobs_api_bp.get("")
def list_jobs_endpoint():
    session = open_session()
    try:
        return jsonify([serialize_job(job) for job in list_jobs(session)]), 200
    finally:
        session.close()


@jobs_api_bp.post("")
@csrf.exempt
@admin_required
def create_job_endpoint():
    session = open_session()
    try:
        job, errors = create_job(session, request.get_json(silent=True) or {})
        if errors:
            session.rollback()
            return error_response(errors[0], 400, errors)
        session.commit()
        invalidate_jobs()
        return jsonify(serialize_job(job)), 201
    finally:
        session.close()


@jobs_api_bp.put("/<int:job_id>")
@csrf.exempt
@admin_required
def update_job_endpoint(job_id: int):
    session = open_session()
    try:
        job = session.get(JobHistory, job_id)
        if job is None:
            return error_response("job history entry not found", 404)
        errors = update_job(job, request.get_json(silent=True) or {})
        if errors:
            session.rollback()
            return error_response(errors[0], 400, errors)
        session.commit()
        invalidate_jobs()
        return jsonify(serialize_job(job)), 200
    finally:
        session.close()


@jobs_api_bp.delete("/<int:job_id>")
@csrf.exempt
@admin_required
def delete_job_endpoint(job_id: int):
    session = open_session()
    try:
        job = session.get(JobHistory, job_id)
        if job is None:
            return error_response("job history entry not found", 404)
        session.delete(job)
        session.commit()
        invalidate_jobs()
        return jsonify({"message": "Job history deleted"}), 200
    finally:
        session.close()


__all__ = ["jobs_api_bp"]
