"""Error types surfaced to API callers."""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class FantasyError(Exception):
    """Base error rendered as ``{"detail": ...}`` with ``status_code``."""

    status_code = 500
    default_detail = "Internal error"

    def __init__(
        self, detail: Optional[str] = None, *, headers: Optional[Dict[str, str]] = None
    ) -> None:
        self.detail = detail or self.default_detail
        self.headers = headers
        super().__init__(self.detail)


class AuthenticationFailure(FantasyError):
    status_code = 401
    default_detail = "Not authenticated"

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationFailure(FantasyError):
    status_code = 403
    default_detail = "Admin required"


class ValidationFailure(FantasyError):
    status_code = 400
    default_detail = "Invalid payload"


class NotFound(FantasyError):
    status_code = 404
    default_detail = "Not found"


class Conflict(FantasyError):
    status_code = 409
    default_detail = "Conflict"


class DuplicateResult(Conflict):
    """A (race, athlete) pair was submitted more than once."""

    default_detail = "Result already recorded for this race and athlete"


class StorageFailure(FantasyError):
    status_code = 500
    default_detail = "Storage failure"


async def _fantasy_error_handler(request: Request, exc: FantasyError) -> JSONResponse:
    return JSONResponse(
        {"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ValidationFailure.default_detail
    first = errors[0]
    where = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    if where:
        message = f"{where} {message}"
    return f"{ValidationFailure.default_detail}: {message}"


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return await _fantasy_error_handler(
        request, ValidationFailure(_describe_validation_error(exc))
    )


def register_error_handlers(app: FastAPI) -> None:
    """Render every ``FantasyError`` and malformed request as a JSON failure."""

    app.add_exception_handler(FantasyError, _fantasy_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)


__all__ = [
    "AuthenticationFailure",
    "AuthorizationFailure",
    "Conflict",
    "DuplicateResult",
    "FantasyError",
    "NotFound",
    "StorageFailure",
    "ValidationFailure",
    "register_error_handlers",
]
