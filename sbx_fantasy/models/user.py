"""Database model for registered accounts."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Enum as SAEnum
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Role(str, enum.Enum):
    """Closed set of account roles."""

    USER = "user"
    ADMIN = "admin"

    @property
    def can_administer(self) -> bool:
        """Whether the role may create athletes, races and results."""
        return self is Role.ADMIN


class User(SQLModel, table=True):
    """Account authenticated by email and password."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    email: str = ORMField(index=True, unique=True)
    password_hash: str
    name: str = ""
    role: Role = ORMField(
        default=Role.USER,
        sa_column=Column(
            SAEnum(
                Role,
                values_callable=lambda roles: [role.value for role in roles],
                native_enum=False,
                length=16,
            ),
            nullable=False,
        ),
    )
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Role", "User"]
