"""Account registration, login and admin bootstrap."""

from __future__ import annotations

import logging
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from ..core import AuthenticationFailure, Conflict, ValidationFailure
from ..core.security import create_access_token, hash_password, verify_password
from ..models import Role, User

logger = logging.getLogger(__name__)


def normalize_email(email: Any) -> str:
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def find_user_by_email(session: Session, email: str) -> User | None:
    return session.exec(
        select(User).where(func.lower(User.email) == normalize_email(email))
    ).first()


def issue_token(user: User) -> str:
    return create_access_token(user_id=user.id, email=user.email, role=user.role.value)


def register_user(session: Session, body: Dict[str, Any]) -> User:
    """Create a ``user``-role account from ``{email, password, name?}``."""

    email = normalize_email(body.get("email"))
    password = body.get("password")
    name = body.get("name") or ""
    if not email or not isinstance(password, str) or not password:
        raise ValidationFailure("Email + password required")
    if not isinstance(name, str):
        raise ValidationFailure("Name must be a string")

    if find_user_by_email(session, email):
        raise Conflict("Email already registered")

    user = User(
        email=email,
        password_hash=hash_password(password),
        name=name.strip()[:80],
        role=Role.USER,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise Conflict("Email already registered") from exc
    session.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(session: Session, body: Dict[str, Any]) -> User:
    """Return the account matching ``{email, password}``."""

    email = normalize_email(body.get("email"))
    password = body.get("password")
    user = find_user_by_email(session, email) if email else None
    if not user or not isinstance(password, str) or not verify_password(
        password, user.password_hash
    ):
        logger.warning("Failed login for %r", email)
        raise AuthenticationFailure("Invalid credentials")
    return user


def ensure_admin(session: Session, *, email: str, password: str, name: str) -> User:
    """Create the bootstrap admin account when it does not exist yet."""

    existing = find_user_by_email(session, email)
    if existing:
        if existing.role is not Role.ADMIN:
            existing.role = Role.ADMIN
            session.add(existing)
            session.commit()
            session.refresh(existing)
        return existing

    admin = User(
        email=normalize_email(email),
        password_hash=hash_password(password),
        name=name,
        role=Role.ADMIN,
    )
    session.add(admin)
    session.commit()
    session.refresh(admin)
    logger.info("Bootstrapped default admin -> %s", admin.email)
    return admin


__all__ = [
    "authenticate_user",
    "ensure_admin",
    "find_user_by_email",
    "issue_token",
    "normalize_email",
    "register_user",
]
