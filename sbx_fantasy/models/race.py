"""Database model for races."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Race(SQLModel, table=True):
    """A single race; results are recorded against it."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str
    # Stored in UTC.
    date: datetime = ORMField(default_factory=utcnow, index=True)


__all__ = ["Race"]
