"""Aggregate API routers."""

from fastapi import APIRouter

from .athletes import router as athletes_router
from .auth import router as auth_router
from .races import router as races_router
from .results import router as results_router
from .scoring import router as scoring_router
from .standings import router as standings_router
from .system import router as system_router

# Mounted under the configured API prefix.
API_ROUTERS: tuple[APIRouter, ...] = (
    auth_router,
    athletes_router,
    races_router,
    results_router,
    standings_router,
    scoring_router,
)

__all__ = ["API_ROUTERS", "system_router"]
