"""Fantasy points engine.

Points are awarded from race results by a list of scoring rules. Each rule is
a callable ``(result, table) -> int`` that sees the whole result context
(``athleteId``, ``raceId``, ``place``, ``time``), so bonus rules can be added
without touching the call sites. The shipped rule set only awards points for
finishing place.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PLACE_POINTS: Dict[int, int] = {
    1: 100,
    2: 80,
    3: 65,
    4: 55,
    5: 45,
    6: 40,
    7: 36,
    8: 32,
}


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def as_int(value: Any) -> Optional[int]:
    """Read an integer-like value that fits a signed 64-bit column.

    Anything else, including integers outside that range, yields None.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if not isinstance(value, int):
        return None
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


@dataclass(frozen=True)
class PointsTable:
    """Immutable mapping from finishing place to points."""

    place_points: Mapping[int, int] = field(
        default_factory=lambda: dict(DEFAULT_PLACE_POINTS)
    )

    def points_for_place(self, place: Any) -> int:
        """Points for ``place``; unmapped or malformed places score 0."""

        rank = as_int(place)
        if rank is None:
            return 0
        return self.place_points.get(rank, 0)

    def as_rows(self) -> List[Dict[str, int]]:
        return [
            {"place": place, "points": points}
            for place, points in sorted(self.place_points.items())
        ]

    @classmethod
    def from_mapping(cls, raw: Mapping[Any, Any]) -> "PointsTable":
        """Build a table from ``{place: points}``, keys may be strings."""

        table: Dict[int, int] = {}
        for key, value in raw.items():
            place = as_int(key)
            if place is None or place < 1:
                raise ValueError(f"Invalid place in points table: {key!r}")
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Invalid points for place {key!r}: {value!r}")
            table[place] = value
        return cls(place_points=table)

    @classmethod
    def load(cls, path: str | Path) -> "PointsTable":
        """Load a table from a JSON object file."""

        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Points table {path} must be a JSON object")
        table = cls.from_mapping(data)
        logger.info("Loaded points table from %s (%d places)", path, len(table.place_points))
        return table


ScoringRule = Callable[[Mapping[str, Any], PointsTable], int]


def place_points_rule(result: Mapping[str, Any], table: PointsTable) -> int:
    """Award the table value for the finishing place."""

    return table.points_for_place(result.get("place"))


DEFAULT_RULES: Tuple[ScoringRule, ...] = (place_points_rule,)

DEFAULT_TABLE = PointsTable()


def calculate_points_for_result(
    result: Mapping[str, Any],
    table: Optional[PointsTable] = None,
    rules: Iterable[ScoringRule] = DEFAULT_RULES,
) -> int:
    """Score one result record; never raises and never goes below zero."""

    if not isinstance(result, Mapping):
        return 0
    points_table = table or DEFAULT_TABLE
    total = sum(rule(result, points_table) for rule in rules)
    return max(int(total), 0)


def describe_rules(rules: Iterable[ScoringRule] = DEFAULT_RULES) -> List[str]:
    return [rule.__name__ for rule in rules]


__all__ = [
    "DEFAULT_PLACE_POINTS",
    "DEFAULT_RULES",
    "DEFAULT_TABLE",
    "INT64_MAX",
    "INT64_MIN",
    "PointsTable",
    "ScoringRule",
    "as_int",
    "calculate_points_for_result",
    "describe_rules",
    "place_points_rule",
]
