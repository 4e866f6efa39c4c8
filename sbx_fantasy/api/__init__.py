"""API assembly helpers."""

from __future__ import annotations

from fastapi import FastAPI

from .routers import API_ROUTERS, system_router


def register_routes(app: FastAPI, prefix: str = "") -> None:
    """Attach all application routers to the given app."""

    app.include_router(system_router)
    for router in API_ROUTERS:
        app.include_router(router, prefix=prefix)


__all__ = ["register_routes"]
