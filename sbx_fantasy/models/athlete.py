"""Database model for athletes."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field as ORMField, SQLModel


class Athlete(SQLModel, table=True):
    """Competitor that earns fantasy points."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str = ORMField(index=True)
    country: Optional[str] = None


__all__ = ["Athlete"]
