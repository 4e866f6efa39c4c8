"""Athlete endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlmodel import Session, col, select

from ...core import get_session
from ...models import Athlete
from ...services.catalog import athlete_to_dict, build_athlete, get_athlete_or_404
from ..deps import require_admin

router = APIRouter(tags=["athletes"])


@router.get("/athletes")
def list_athletes(session: Session = Depends(get_session)):
    """List all athletes."""

    athletes = session.exec(select(Athlete).order_by(col(Athlete.id))).all()
    return [athlete_to_dict(athlete) for athlete in athletes]


@router.post("/athletes", dependencies=[Depends(require_admin)])
def create_athlete(body: Dict[str, Any], session: Session = Depends(get_session)):
    """Register a new athlete."""

    athlete = build_athlete(body)
    session.add(athlete)
    session.commit()
    session.refresh(athlete)
    return athlete_to_dict(athlete)


@router.get("/athletes/{athlete_id}")
def get_athlete(athlete_id: int, session: Session = Depends(get_session)):
    return athlete_to_dict(get_athlete_or_404(session, athlete_id))


__all__ = ["router"]
