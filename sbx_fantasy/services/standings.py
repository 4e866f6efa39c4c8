"""Leaderboard aggregation over the fantasy score ledger."""

from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import func
from sqlmodel import Session, col, select

from ..models import Athlete, FantasyScore


def compute_standings(session: Session) -> List[Dict[str, Any]]:
    """Total points per athlete, highest first.

    Athletes without scores are listed with 0. Equal totals are ordered by
    athlete id.
    """

    total = func.coalesce(func.sum(FantasyScore.points), 0).label("total_points")
    rows = session.exec(
        select(Athlete.id, Athlete.name, Athlete.country, total)
        .outerjoin(FantasyScore, col(FantasyScore.athlete_id) == col(Athlete.id))
        .group_by(col(Athlete.id), col(Athlete.name), col(Athlete.country))
        .order_by(total.desc(), col(Athlete.id).asc())
    ).all()

    return [
        {
            "athleteId": athlete_id,
            "name": name,
            "country": country,
            "totalPoints": int(total_points),
        }
        for athlete_id, name, country, total_points in rows
    ]


__all__ = ["compute_standings"]
