"""Standings endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import get_session
from ...services.standings import compute_standings

router = APIRouter(tags=["standings"])


@router.get("/standings")
def get_standings(session: Session = Depends(get_session)):
    """Total fantasy points per athlete, highest first."""

    return compute_standings(session)


__all__ = ["router"]
