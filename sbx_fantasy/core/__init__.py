"""Core configuration and infrastructure helpers."""

from .config import (
    ADMIN_EMAIL,
    ADMIN_NAME,
    ADMIN_PASSWORD,
    ALLOWED_CORS_ORIGINS,
    API_PREFIX,
    DATABASE_URL,
    DB_RESET,
    LOG_LEVEL,
    POINTS_TABLE_PATH,
    SECRET_KEY,
    TOKEN_TTL_DAYS,
)
from .database import build_engine, get_session
from .errors import (
    AuthenticationFailure,
    AuthorizationFailure,
    Conflict,
    DuplicateResult,
    FantasyError,
    NotFound,
    StorageFailure,
    ValidationFailure,
    register_error_handlers,
)
from .logs import configure_logging
from .time import isoformat_utc, parse_timestamp, utcnow

__all__ = [
    "ADMIN_EMAIL",
    "ADMIN_NAME",
    "ADMIN_PASSWORD",
    "ALLOWED_CORS_ORIGINS",
    "API_PREFIX",
    "DATABASE_URL",
    "DB_RESET",
    "LOG_LEVEL",
    "POINTS_TABLE_PATH",
    "SECRET_KEY",
    "TOKEN_TTL_DAYS",
    "AuthenticationFailure",
    "AuthorizationFailure",
    "Conflict",
    "DuplicateResult",
    "FantasyError",
    "NotFound",
    "StorageFailure",
    "ValidationFailure",
    "build_engine",
    "configure_logging",
    "get_session",
    "isoformat_utc",
    "parse_timestamp",
    "register_error_handlers",
    "utcnow",
]
