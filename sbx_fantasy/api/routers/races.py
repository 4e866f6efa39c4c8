"""Race endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlmodel import Session, col, select

from ...core import get_session
from ...models import Race
from ...services.catalog import build_race, get_race_or_404, race_to_dict
from ...services.results import results_for_race
from ..deps import require_admin

router = APIRouter(tags=["races"])


@router.post("/races", dependencies=[Depends(require_admin)])
def create_race(body: Dict[str, Any], session: Session = Depends(get_session)):
    """Create a race."""

    race = build_race(body)
    session.add(race)
    session.commit()
    session.refresh(race)
    return race_to_dict(race)


@router.get("/races")
def list_races(session: Session = Depends(get_session)):
    """List races, most recent first."""

    races = session.exec(
        select(Race).order_by(col(Race.date).desc(), col(Race.id).desc())
    ).all()
    return [race_to_dict(race) for race in races]


@router.get("/races/{race_id}")
def get_race(race_id: int, session: Session = Depends(get_session)):
    return race_to_dict(get_race_or_404(session, race_id))


@router.get("/races/{race_id}/results")
def get_race_results(race_id: int, session: Session = Depends(get_session)):
    """Stored results and points for one race."""

    return results_for_race(session, race_id)


__all__ = ["router"]
