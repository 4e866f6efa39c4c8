"""Helpers for athlete and race domain objects."""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlmodel import Session

from ..core import NotFound, ValidationFailure, isoformat_utc, parse_timestamp
from ..models import Athlete, Race
from .scoring import as_int


def athlete_to_dict(athlete: Athlete) -> Dict[str, Any]:
    return {"id": athlete.id, "name": athlete.name, "country": athlete.country}


def race_to_dict(race: Race) -> Dict[str, Any]:
    return {"id": race.id, "name": race.name, "date": isoformat_utc(race.date)}


def _clean_text(raw: Any, limit: int) -> Optional[str]:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ValidationFailure("Text fields must be strings")
    text = raw.strip()
    return text[:limit] if text else None


def build_athlete(body: Dict[str, Any]) -> Athlete:
    """Validate an athlete payload; name is required, country optional."""

    name = _clean_text(body.get("name"), 120)
    if not name:
        raise ValidationFailure("Athlete name is required")
    return Athlete(name=name, country=_clean_text(body.get("country"), 80))


def build_race(body: Dict[str, Any]) -> Race:
    """Validate a race payload; date defaults to now when omitted."""

    name = _clean_text(body.get("name"), 120)
    if not name:
        raise ValidationFailure("Race name is required")

    raw_date = body.get("date")
    if raw_date in (None, ""):
        return Race(name=name)
    if not isinstance(raw_date, str):
        raise ValidationFailure("Race date must be an ISO-8601 string")
    try:
        date = parse_timestamp(raw_date)
    except ValueError as exc:
        raise ValidationFailure("Race date must be an ISO-8601 string") from exc
    return Race(name=name, date=date)


def get_athlete_or_404(session: Session, athlete_id: int) -> Athlete:
    athlete = session.get(Athlete, athlete_id) if as_int(athlete_id) is not None else None
    if not athlete:
        raise NotFound("Athlete not found")
    return athlete


def get_race_or_404(session: Session, race_id: int) -> Race:
    race = session.get(Race, race_id) if as_int(race_id) is not None else None
    if not race:
        raise NotFound("Race not found")
    return race


__all__ = [
    "athlete_to_dict",
    "build_athlete",
    "build_race",
    "get_athlete_or_404",
    "get_race_or_404",
    "race_to_dict",
]
