"""Password hashing and bearer token helpers."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from .config import SECRET_KEY, TOKEN_ALGORITHM, TOKEN_TTL_DAYS
from .errors import AuthenticationFailure
from .time import utcnow

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Compare a plaintext password against a stored hash."""

    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


def create_access_token(
    *,
    user_id: int,
    email: str,
    role: str,
    ttl: Optional[timedelta] = None,
    secret: str = SECRET_KEY,
) -> str:
    """Sign a token carrying ``{id, email, role}``."""

    issued = utcnow()
    expires = issued + (ttl if ttl is not None else timedelta(days=TOKEN_TTL_DAYS))
    payload = {
        "sub": str(user_id),
        "id": user_id,
        "email": email,
        "role": role,
        "iat": issued,
        "exp": expires,
    }
    return jwt.encode(payload, secret, algorithm=TOKEN_ALGORITHM)


def decode_access_token(token: str, *, secret: str = SECRET_KEY) -> Dict[str, Any]:
    """Verify ``token`` and return its payload.

    Raises ``AuthenticationFailure`` for expired or tampered tokens.
    """

    try:
        return jwt.decode(token, secret, algorithms=[TOKEN_ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationFailure("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationFailure("Invalid token") from exc


__all__ = [
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "pwd_context",
    "verify_password",
]
