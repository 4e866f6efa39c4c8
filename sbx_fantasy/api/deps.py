"""Request dependencies for authentication and role checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core import AuthenticationFailure, AuthorizationFailure
from ..core.security import decode_access_token
from ..models import Role
from ..services.scoring import PointsTable

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Caller identity carried by a verified bearer token."""

    id: int
    email: str
    role: Role


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise AuthenticationFailure("Missing token")

    payload = decode_access_token(credentials.credentials)
    try:
        return Principal(
            id=int(payload["id"]),
            email=str(payload["email"]),
            role=Role(payload["role"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationFailure("Invalid token") from exc


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not principal.role.can_administer:
        raise AuthorizationFailure("Admin required")
    return principal


def get_points_table(request: Request) -> PointsTable:
    return request.app.state.points_table


__all__ = [
    "Principal",
    "bearer_scheme",
    "get_current_principal",
    "get_points_table",
    "require_admin",
]
