"""Result submission endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlmodel import Session

from ...core import get_session
from ...services.results import ingest_results, parse_result_batch
from ...services.scoring import PointsTable
from ..deps import get_points_table, require_admin

router = APIRouter(tags=["results"])


@router.post("/results", dependencies=[Depends(require_admin)])
def submit_results(
    body: Any = Body(None),
    session: Session = Depends(get_session),
    table: PointsTable = Depends(get_points_table),
):
    """Store a race's results; points are calculated server side."""

    race_id, entries = parse_result_batch(body)
    stored = ingest_results(session, race_id, entries, table)
    return {
        "message": "Results stored and points calculated",
        "raceId": race_id,
        "count": len(stored),
    }


__all__ = ["router"]
