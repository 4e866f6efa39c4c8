"""Service layer helpers."""

from .accounts import authenticate_user, ensure_admin, issue_token, register_user
from .catalog import athlete_to_dict, build_athlete, build_race, race_to_dict
from .results import ingest_results, parse_result_batch, results_for_race
from .scoring import PointsTable, calculate_points_for_result
from .standings import compute_standings

__all__ = [
    "PointsTable",
    "athlete_to_dict",
    "authenticate_user",
    "build_athlete",
    "build_race",
    "calculate_points_for_result",
    "compute_standings",
    "ensure_admin",
    "ingest_results",
    "issue_token",
    "parse_result_batch",
    "race_to_dict",
    "register_user",
    "results_for_race",
]
