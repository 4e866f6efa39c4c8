"""Database models for race results and the fantasy score ledger."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Result(SQLModel, table=True):
    """One athlete's recorded outcome in one race."""

    __table_args__ = (
        UniqueConstraint("race_id", "athlete_id", name="uq_result_race_athlete"),
    )

    id: Optional[int] = ORMField(default=None, primary_key=True)
    race_id: int = ORMField(foreign_key="race.id", index=True)
    athlete_id: int = ORMField(foreign_key="athlete.id", index=True)
    place: Optional[int] = None
    time: Optional[float] = None
    points: int = 0
    created_at: datetime = ORMField(default_factory=utcnow)


class FantasyScore(SQLModel, table=True):
    """Points an athlete earned for a race; standings are summed from here."""

    __tablename__ = "fantasy_score"
    __table_args__ = (
        UniqueConstraint("athlete_id", "race_id", name="uq_score_athlete_race"),
    )

    id: Optional[int] = ORMField(default=None, primary_key=True)
    athlete_id: int = ORMField(foreign_key="athlete.id", index=True)
    race_id: int = ORMField(foreign_key="race.id", index=True)
    points: int = 0


__all__ = ["FantasyScore", "Result"]
