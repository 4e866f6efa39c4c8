"""Database model exports."""

from .athlete import Athlete
from .race import Race
from .result import FantasyScore, Result
from .user import Role, User

__all__ = [
    "Athlete",
    "FantasyScore",
    "Race",
    "Result",
    "Role",
    "User",
]
