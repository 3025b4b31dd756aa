from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class PointTotals:
    """The three counters kept on a member row (a cache of the ledger)."""

    total_points: int = 0
    spring_2025_total: int = 0
    fall_2025_total: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PointTotals":
        return cls(
            total_points=int(row.get("total_points") or 0),
            spring_2025_total=int(row.get("spring_2025_total") or 0),
            fall_2025_total=int(row.get("fall_2025_total") or 0),
        )

    def as_columns(self) -> dict[str, int]:
        return {
            "total_points": self.total_points,
            "spring_2025_total": self.spring_2025_total,
            "fall_2025_total": self.fall_2025_total,
        }


@dataclass(frozen=True)
class Member:
    """Domain entity: an organization member and their point counters."""

    member_id: int
    computing_id: str
    name: str
    email: str
    is_exec: bool
    total_points: int = 0
    spring_2025_total: int = 0
    fall_2025_total: int = 0

    @property
    def totals(self) -> PointTotals:
        return PointTotals(
            total_points=self.total_points,
            spring_2025_total=self.spring_2025_total,
            fall_2025_total=self.fall_2025_total,
        )
