"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session, SQLModel

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import (
    ADMIN_EMAIL,
    ADMIN_NAME,
    ADMIN_PASSWORD,
    ALLOWED_CORS_ORIGINS,
    API_PREFIX,
    DATABASE_URL,
    DB_RESET,
    LOG_LEVEL,
    POINTS_TABLE_PATH,
    build_engine,
    configure_logging,
    register_error_handlers,
)
from .services.accounts import ensure_admin
from .services.scoring import PointsTable

logger = logging.getLogger(__name__)


def create_app(
    *,
    database_url: Optional[str] = None,
    points_table: Optional[PointsTable] = None,
    api_prefix: Optional[str] = None,
    reset_db: Optional[bool] = None,
) -> FastAPI:
    """Build the API; keyword arguments override environment settings."""

    configure_logging(LOG_LEVEL)
    url = database_url or DATABASE_URL
    prefix = API_PREFIX if api_prefix is None else api_prefix.rstrip("/")
    drop_first = DB_RESET if reset_db is None else reset_db

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = build_engine(url)
        if drop_first:
            SQLModel.metadata.drop_all(engine)
        SQLModel.metadata.create_all(engine)
        with Session(engine) as session:
            ensure_admin(
                session, email=ADMIN_EMAIL, password=ADMIN_PASSWORD, name=ADMIN_NAME
            )

        app.state.engine = engine
        app.state.points_table = points_table or (
            PointsTable.load(POINTS_TABLE_PATH) if POINTS_TABLE_PATH else PointsTable()
        )
        logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(title="SBX Fantasy API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    register_routes(app, prefix=prefix)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("sbx_fantasy.app:app", host="127.0.0.1", port=4000, reload=True)
