"""Email/password authentication routes."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import NotFound, get_session
from ...models import User
from ...services.accounts import authenticate_user, issue_token, register_user
from ..deps import Principal, get_current_principal

router = APIRouter(tags=["auth"])


@router.post("/auth/register")
def auth_register(body: Dict[str, Any], session: Session = Depends(get_session)):
    """Register a ``user``-role account and return its token."""

    user = register_user(session, body)
    return {"token": issue_token(user)}


@router.post("/auth/login")
def auth_login(body: Dict[str, Any], session: Session = Depends(get_session)):
    user = authenticate_user(session, body)
    return {"token": issue_token(user), "role": user.role.value, "name": user.name}


@router.get("/auth/me")
def auth_me(
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    """Profile of the token holder."""

    user = session.get(User, principal.id)
    if not user:
        raise NotFound("User not found")
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name or user.email.split("@")[0],
        "role": user.role.value,
    }


__all__ = ["router"]
