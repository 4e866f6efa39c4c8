"""Time helpers shared by models and serialisers."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO-8601 date or datetime into an aware UTC datetime.

    Values without an offset are read as UTC.

    Raises ``ValueError`` when ``raw`` is not ISO-8601.
    """

    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = datetime.combine(date.fromisoformat(text), datetime.min.time())
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def isoformat_utc(value: Optional[datetime]) -> Optional[str]:
    """Render a stored datetime as ISO-8601 with a trailing ``Z``."""

    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + "Z"


__all__ = ["isoformat_utc", "parse_timestamp", "utcnow"]
