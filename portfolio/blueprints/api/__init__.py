from flask import Blueprint

from .blog import blog_api_bp
from .certifications import certifications_api_bp
from .health import health
from .jobs import jobs_api_bp
from .profile import profile_api_bp


api_bp = Blueprint("api", __name__)
api_bp.add_url_rule("/health", view_func=health)


__all__ = [
    "api_bp",
    "blog_api_bp",
    "certifications_api_bp",
    "jobs_api_bp",
    "profile_api_bp",
]
