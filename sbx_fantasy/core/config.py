"""Application settings and environment helpers."""

from __future__ import annotations

import os
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _require_env(name: str) -> str:
    """Read a setting that has no default; blank counts as missing."""

    value = (os.getenv(name) or "").strip()
    if value:
        return value
    raise RuntimeError(f"{name} must be set in the environment or .env")


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    """Comma-separated items, blanks dropped."""

    return [item for item in (part.strip() for part in (raw or "").split(",")) if item]


def _unique(values: Iterable[str]) -> List[str]:
    """First occurrence of each value, order kept."""

    return list(dict.fromkeys(values))


# Application security -------------------------------------------------------
SECRET_KEY = _require_env("SECRET_KEY")
TOKEN_ALGORITHM = "HS256"
TOKEN_TTL_DAYS = _env_int("TOKEN_TTL_DAYS", 7)

# Bootstrapped administrator account.
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@sbx.local")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "adminpass")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")


# CORS -----------------------------------------------------------------------
_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

_local_dev_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

ALLOWED_CORS_ORIGINS = _unique(
    [
        *_frontend_origins,
        *_additional_origins,
        *_local_dev_origins,
    ]
)


# Runtime behaviour ----------------------------------------------------------
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/app.db")
DB_RESET = _env_bool("DB_RESET", False)
API_PREFIX = os.getenv("API_PREFIX", "/api").rstrip("/")
POINTS_TABLE_PATH = os.getenv("POINTS_TABLE_PATH") or None
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


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
    "TOKEN_ALGORITHM",
    "TOKEN_TTL_DAYS",
]
