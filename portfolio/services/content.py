"""CRUD helpers for profile, job history, certifications and blog posts."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio.models import BlogPost, Certification, JobHistory, Profile
from portfolio.services.cache import (
    CERTIFICATION_PATHS,
    JOB_HISTORY_PATHS,
    PROFILE_PATHS,
    invalidate_blog,
    page_cache,
)

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
MAX_IMAGE_BYTES = {
    "profile": 5 * 1024 * 1024,
    "cover": 10 * 1024 * 1024,
}

_SLUG_INVALID_RE = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Derive a URL-safe slug: lowercase, runs of other characters become ``-``."""

    return _SLUG_INVALID_RE.sub("-", (title or "").lower()).strip("-")


def _iso(value: Optional[datetime]) -> Optional[str]:
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc).isoformat()
    return value.astimezone(timezone.utc).isoformat()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def validate_image_upload(content_type: Any, size: Any, kind: str) -> List[str]:
    """Check declared image metadata against the type allow-list and size ceiling."""

    errors: List[str] = []
    if content_type not in ALLOWED_IMAGE_TYPES:
        errors.append(f"unsupported image type: {content_type}")
    limit = MAX_IMAGE_BYTES[kind]
    try:
        declared = int(size)
    except (TypeError, ValueError):
        errors.append("image size must be an integer")
    else:
        if declared <= 0 or declared > limit:
            errors.append(f"{kind} image must be at most {limit // (1024 * 1024)}MB")
    return errors


# --- Payload models --------------------------------------------------------


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def _parse_datetime(value: Any) -> Any:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str) and not value.strip():
        return None
    try:
        parsed = date_parser.isoparse(str(value))
    except (ValueError, TypeError) as exc:
        raise ValueError("expected an ISO-8601 date") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class ImageMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_type: Optional[str] = Field(default=None, alias="contentType")
    size: Optional[int] = None


class ProfilePayload(_Payload):
    name: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    bio: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    profile_image: Optional[str] = Field(default=None, alias="profileImage")
    profile_image_meta: Optional[ImageMeta] = Field(default=None, alias="profileImageMeta")


class JobHistoryPayload(_Payload):
    company: Optional[str] = None
    position: Optional[str] = None
    start_date: Optional[datetime] = Field(default=None, alias="startDate")
    end_date: Optional[datetime] = Field(default=None, alias="endDate")
    current: Optional[bool] = None
    description: Optional[str] = None
    order: Optional[int] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Any:
        return _parse_datetime(value)


class CertificationPayload(_Payload):
    name: Optional[str] = None
    issuer: Optional[str] = None
    issue_date: Optional[datetime] = Field(default=None, alias="issueDate")
    expiry_date: Optional[datetime] = Field(default=None, alias="expiryDate")
    credential_id: Optional[str] = Field(default=None, alias="credentialId")
    credential_url: Optional[str] = Field(default=None, alias="credentialUrl")
    description: Optional[str] = None
    order: Optional[int] = None

    @field_validator("issue_date", "expiry_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Any:
        return _parse_datetime(value)


class BlogPostPayload(_Payload):
    title: Optional[str] = None
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    cover_image: Optional[str] = Field(default=None, alias="coverImage")
    cover_image_meta: Optional[ImageMeta] = Field(default=None, alias="coverImageMeta")
    published: Optional[bool] = None
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")

    @field_validator("published_at", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Any:
        return _parse_datetime(value)


_IMAGE_META_FIELDS = {
    "profile_image_meta": "profile",
    "cover_image_meta": "cover",
}


def _format_validation_error(exc: ValidationError) -> List[str]:
    messages: List[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return messages


def _load_payload(
    model: Type[_Payload],
    raw: Any,
    *,
    required: Sequence[str] = (),
) -> Tuple[Dict[str, Any], List[str]]:
    """Validate ``raw`` returning the set fields and any error messages."""

    if not isinstance(raw, dict):
        return {}, ["payload must be a JSON object"]
    try:
        parsed = model.model_validate(raw)
    except ValidationError as exc:
        return {}, _format_validation_error(exc)

    values = parsed.model_dump(exclude_unset=True)
    errors: List[str] = []
    for field_name, kind in _IMAGE_META_FIELDS.items():
        meta = values.pop(field_name, None)
        if meta:
            errors.extend(validate_image_upload(meta.get("content_type"), meta.get("size"), kind))
    for field_name in required:
        if values.get(field_name) in (None, ""):
            errors.append(f"{field_name} is required")
    return values, errors


def _apply(record: Any, values: Dict[str, Any]) -> None:
    for key, value in values.items():
        setattr(record, key, value)


# --- Serialization ---------------------------------------------------------


def serialize_profile(profile: Profile) -> Dict[str, Any]:
    return {
        "id": profile.id,
        "name": profile.name,
        "title": profile.title,
        "summary": profile.summary,
        "bio": profile.bio,
        "email": profile.email,
        "phone": profile.phone,
        "location": profile.location,
        "linkedin": profile.linkedin,
        "profileImage": profile.profile_image,
        "createdAt": _iso(profile.created_at),
        "updatedAt": _iso(profile.updated_at),
    }


def serialize_job(job: JobHistory) -> Dict[str, Any]:
    return {
        "id": job.id,
        "company": job.company,
        "position": job.position,
        "startDate": _iso(job.start_date),
        "endDate": _iso(job.end_date),
        "current": bool(job.current),
        "description": job.description,
        "order": int(job.order or 0),
        "createdAt": _iso(job.created_at),
        "updatedAt": _iso(job.updated_at),
    }


def serialize_certification(certification: Certification) -> Dict[str, Any]:
    return {
        "id": certification.id,
        "name": certification.name,
        "issuer": certification.issuer,
        "issueDate": _iso(certification.issue_date),
        "expiryDate": _iso(certification.expiry_date),
        "credentialId": certification.credential_id,
        "credentialUrl": certification.credential_url,
        "description": certification.description,
        "order": int(certification.order or 0),
        "createdAt": _iso(certification.created_at),
        "updatedAt": _iso(certification.updated_at),
    }


def serialize_post(post: BlogPost, *, include_content: bool = True) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "coverImage": post.cover_image,
        "published": bool(post.published),
        "publishedAt": _iso(post.published_at),
        "createdAt": _iso(post.created_at),
        "updatedAt": _iso(post.updated_at),
    }
    if include_content:
        payload["content"] = post.content
    return payload


# --- Profile ---------------------------------------------------------------


def get_profile(session: Session) -> Optional[Profile]:
    return session.scalar(
        select(Profile).order_by(Profile.updated_at.desc(), Profile.id.desc()).limit(1)
    )


def upsert_profile(session: Session, raw: Any) -> Tuple[Optional[Profile], List[str]]:
    """Update the first profile or create one. The caller commits."""

    existing = session.scalar(select(Profile).order_by(Profile.id.asc()).limit(1))
    required = () if existing is not None else ("name", "title")
    values, errors = _load_payload(ProfilePayload, raw, required=required)
    if errors:
        return None, errors

    profile = existing or Profile()
    _apply(profile, values)
    if existing is None:
        session.add(profile)
    return profile, []


# --- Job history -----------------------------------------------------------


def list_jobs(session: Session) -> List[JobHistory]:
    stmt = select(JobHistory).order_by(JobHistory.order.asc(), JobHistory.start_date.desc())
    return list(session.scalars(stmt))


def create_job(session: Session, raw: Any) -> Tuple[Optional[JobHistory], List[str]]:
    values, errors = _load_payload(
        JobHistoryPayload, raw, required=("company", "position", "start_date")
    )
    if errors:
        return None, errors
    job = JobHistory(current=False, order=0)
    _apply(job, values)
    session.add(job)
    return job, []


def update_job(job: JobHistory, raw: Any) -> List[str]:
    values, errors = _load_payload(JobHistoryPayload, raw)
    if errors:
        return errors
    _apply(job, values)
    return []


# --- Certifications --------------------------------------------------------


def list_certifications(session: Session) -> List[Certification]:
    stmt = select(Certification).order_by(
        Certification.order.asc(), Certification.issue_date.desc()
    )
    return list(session.scalars(stmt))


def create_certification(
    session: Session, raw: Any
) -> Tuple[Optional[Certification], List[str]]:
    values, errors = _load_payload(
        CertificationPayload, raw, required=("name", "issuer", "issue_date")
    )
    if errors:
        return None, errors
    certification = Certification(order=0)
    _apply(certification, values)
    session.add(certification)
    return certification, []


def update_certification(certification: Certification, raw: Any) -> List[str]:
    values, errors = _load_payload(CertificationPayload, raw)
    if errors:
        return errors
    _apply(certification, values)
    return []


# --- Blog posts ------------------------------------------------------------


def list_posts(session: Session, *, include_unpublished: bool = False) -> List[BlogPost]:
    stmt = select(BlogPost).order_by(BlogPost.published_at.desc(), BlogPost.created_at.desc())
    if not include_unpublished:
        stmt = stmt.where(BlogPost.published.is_(True))
    return list(session.scalars(stmt))


def get_post(session: Session, slug: str) -> Optional[BlogPost]:
    return session.scalar(select(BlogPost).where(BlogPost.slug == slug))


def create_post(session: Session, raw: Any) -> Tuple[Optional[BlogPost], List[str]]:
    values, errors = _load_payload(BlogPostPayload, raw, required=("title",))
    if errors:
        return None, errors

    values["slug"] = slugify(values.get("slug") or values["title"])
    if not values["slug"]:
        return None, ["slug could not be derived from title"]
    published = bool(values.get("published"))
    values["published"] = published
    values["published_at"] = _utcnow() if published else None
    values.setdefault("content", "")
    if values["content"] is None:
        values["content"] = ""

    post = BlogPost()
    _apply(post, values)
    session.add(post)
    return post, []


def update_post(post: BlogPost, raw: Any) -> List[str]:
    """Apply ``raw`` to ``post``; the first publish stamps ``published_at``."""

    values, errors = _load_payload(BlogPostPayload, raw)
    if errors:
        return errors
    if "slug" in values:
        values["slug"] = slugify(values["slug"] or "")
        if not values["slug"]:
            return ["slug must not be empty"]
    if "title" in values and not values["title"]:
        return ["title is required"]
    if values.get("published") and not values.get("published_at") and post.published_at is None:
        values["published_at"] = _utcnow()
    if values.get("content", "") is None:
        values["content"] = ""
    _apply(post, values)
    return []


# --- Cache invalidation ----------------------------------------------------


def invalidate_profile() -> None:
    page_cache.mark_stale(*PROFILE_PATHS)


def invalidate_jobs() -> None:
    page_cache.mark_stale(*JOB_HISTORY_PATHS)


def invalidate_certifications() -> None:
    page_cache.mark_stale(*CERTIFICATION_PATHS)


__all__ = [
    "ALLOWED_IMAGE_TYPES",
    "MAX_IMAGE_BYTES",
    "create_certification",
    "create_job",
    "create_post",
    "get_post",
    "get_profile",
    "invalidate_blog",
    "invalidate_certifications",
    "invalidate_jobs",
    "invalidate_profile",
    "list_certifications",
    "list_jobs",
    "list_posts",
    "serialize_certification",
    "serialize_job",
    "serialize_post",
    "serialize_profile",
    "slugify",
    "update_certification",
    "update_job",
    "update_post",
    "upsert_profile",
    "validate_image_upload",
]
