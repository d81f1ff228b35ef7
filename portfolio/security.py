from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import abort
from flask_login import UserMixin, current_user
from sqlalchemy import select
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from portfolio.db import get_session
from portfolio.models import User as UserModel


@dataclass
class User(UserMixin):
    id: int
    email: str
    name: str | None = None


def _to_session_user(model: UserModel) -> User:
    return User(id=model.id, email=model.email, name=model.name)


def get_user_by_email(session: Session, email: str | None) -> Optional[UserModel]:
    if not email:
        return None
    return session.scalar(select(UserModel).where(UserModel.email == email.strip().lower()))


def get_user_by_id(user_id: str, database_url: str | None = None) -> Optional[User]:
    try:
        identifier = int(user_id)
    except (TypeError, ValueError):
        return None
    session = get_session(database_url)
    try:
        model = session.get(UserModel, identifier)
        return _to_session_user(model) if model is not None else None
    finally:
        session.close()


def authenticate(session: Session, email: str | None, password: str | None) -> Optional[User]:
    """Return the session user for valid credentials, otherwise ``None``."""

    if not email or not password:
        return None
    model = get_user_by_email(session, email)
    if model is None or not check_password_hash(model.password_hash, password):
        return None
    return _to_session_user(model)


def create_user(
    session: Session, email: str, password: str, *, name: str | None = None
) -> UserModel:
    """Add a user with a hashed password. The caller commits."""

    normalized = (email or "").strip().lower()
    if not normalized or not password:
        raise ValueError("email and password are required")
    if get_user_by_email(session, normalized) is not None:
        raise ValueError(f"user {normalized} already exists")
    user = UserModel(
        email=normalized,
        name=name,
        password_hash=generate_password_hash(password),
    )
    session.add(user)
    return user


def set_password(session: Session, email: str, password: str) -> UserModel:
    """Replace the password hash of an existing user. The caller commits."""

    if not password:
        raise ValueError("password is required")
    user = get_user_by_email(session, email)
    if user is None:
        raise LookupError(f"user {email} not found")
    user.password_hash = generate_password_hash(password)
    return user


def admin_required(fn):
    """Abort with 401 unless an authenticated session is present."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401)
        return fn(*args, **kwargs)

    return wrapper


__all__ = [
    "User",
    "admin_required",
    "authenticate",
    "create_user",
    "get_user_by_email",
    "get_user_by_id",
    "set_password",
]
