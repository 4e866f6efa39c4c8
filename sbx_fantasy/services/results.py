"""Result batch parsing and ingestion."""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, select

from ..core import DuplicateResult, NotFound, StorageFailure, ValidationFailure
from ..models import Athlete, FantasyScore, Race, Result
from .scoring import PointsTable, as_int, calculate_points_for_result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultEntry:
    """One submitted line of a result batch."""

    athlete_id: int
    place: Optional[int] = None
    time: Optional[float] = None

    def scoring_context(self, race_id: int) -> Dict[str, Any]:
        return {
            "athleteId": self.athlete_id,
            "raceId": race_id,
            "place": self.place,
            "time": self.time,
        }


def _parse_time(raw: Any, index: int) -> Optional[float]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise ValidationFailure(f"results[{index}].time must be a number")
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationFailure(f"results[{index}].time must be a number") from exc
    if not math.isfinite(value):
        raise ValidationFailure(f"results[{index}].time must be a number")
    return value


def parse_result_batch(body: Any) -> Tuple[int, List[ResultEntry]]:
    """Validate the shape of ``{raceId, results: [...]}``.

    The whole batch is rejected on the first malformed field. Places are not
    validated here: a missing or malformed place is stored as null and scores 0.
    """

    if not isinstance(body, dict):
        raise ValidationFailure("raceId + results[] required")

    race_id = as_int(body.get("raceId"))
    results = body.get("results")
    if race_id is None or not isinstance(results, list):
        raise ValidationFailure("raceId + results[] required")
    if not results:
        raise ValidationFailure("At least one result is required")

    entries: List[ResultEntry] = []
    for index, raw in enumerate(results):
        if not isinstance(raw, dict):
            raise ValidationFailure(f"results[{index}] must be an object")
        athlete_id = as_int(raw.get("athleteId"))
        if athlete_id is None:
            raise ValidationFailure(
                f"results[{index}].athleteId must be a 64-bit integer"
            )
        entries.append(
            ResultEntry(
                athlete_id=athlete_id,
                place=as_int(raw.get("place")),
                time=_parse_time(raw.get("time"), index),
            )
        )
    return race_id, entries


def _check_batch(session: Session, race_id: int, entries: Sequence[ResultEntry]) -> None:
    if session.get(Race, race_id) is None:
        raise NotFound("Race not found")

    athlete_ids = [entry.athlete_id for entry in entries]
    repeated = sorted(a for a, seen in Counter(athlete_ids).items() if seen > 1)
    if repeated:
        raise DuplicateResult(f"Duplicate athleteId in batch: {repeated}")

    known = set(session.exec(select(Athlete.id).where(col(Athlete.id).in_(athlete_ids))).all())
    missing = sorted(set(athlete_ids) - known)
    if missing:
        raise NotFound(f"Unknown athleteId: {missing}")

    scored = sorted(
        session.exec(
            select(Result.athlete_id).where(
                Result.race_id == race_id, col(Result.athlete_id).in_(athlete_ids)
            )
        ).all()
    )
    if scored:
        raise DuplicateResult(
            f"Results already recorded for race {race_id}, athleteId: {scored}"
        )


def ingest_results(
    session: Session,
    race_id: int,
    entries: Sequence[ResultEntry],
    table: Optional[PointsTable] = None,
) -> List[Result]:
    """Score and store a batch for one race in a single transaction."""

    try:
        _check_batch(session, race_id, entries)
        stored: List[Result] = []
        for entry in entries:
            points = calculate_points_for_result(entry.scoring_context(race_id), table)
            result = Result(
                race_id=race_id,
                athlete_id=entry.athlete_id,
                place=entry.place,
                time=entry.time,
                points=points,
            )
            session.add(result)
            session.add(
                FantasyScore(athlete_id=entry.athlete_id, race_id=race_id, points=points)
            )
            stored.append(result)
        session.commit()
    except DuplicateResult:
        logger.warning("Rejected resubmission for race %s", race_id)
        raise
    except IntegrityError as exc:
        session.rollback()
        logger.warning("Rejected resubmission for race %s: %s", race_id, exc.orig)
        raise DuplicateResult() from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to store results for race %s", race_id)
        raise StorageFailure("Failed to store results") from exc

    for result in stored:
        session.refresh(result)
    logger.info("Stored %d results for race %s", len(stored), race_id)
    return stored


def results_for_race(session: Session, race_id: int) -> List[Dict[str, Any]]:
    """List stored results for a race, best place first."""

    if as_int(race_id) is None or session.get(Race, race_id) is None:
        raise NotFound("Race not found")

    rows = session.exec(
        select(Result, Athlete.name)
        .join(Athlete, col(Athlete.id) == col(Result.athlete_id))
        .where(Result.race_id == race_id)
        .order_by(col(Result.place).is_(None), col(Result.place), col(Result.id))
    ).all()
    return [
        {
            "id": result.id,
            "raceId": result.race_id,
            "athleteId": result.athlete_id,
            "athleteName": athlete_name,
            "place": result.place,
            "time": result.time,
            "points": result.points,
        }
        for result, athlete_name in rows
    ]


__all__ = ["ResultEntry", "ingest_results", "parse_result_batch", "results_for_race"]
