"""Scoring configuration endpoint."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...services.scoring import PointsTable, describe_rules
from ..deps import get_points_table

router = APIRouter(tags=["scoring"])


@router.get("/scoring")
def get_scoring_config(table: PointsTable = Depends(get_points_table)) -> Dict[str, Any]:
    """Expose the active points table to the frontend."""

    return {"placePoints": table.as_rows(), "rules": describe_rules()}


__all__ = ["router"]
