from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AttendanceRecord:
    """Ledger entry: ``points`` granted to one member for one event."""

    attendance_id: int
    event_id: int
    member_id: int
    points: int


@dataclass(frozen=True)
class LedgerRow:
    """What the aggregator needs from the ledger: points and the event's date."""

    points: int
    event_date: date


@dataclass(frozen=True)
class AttendanceHistoryRow:
    """Read-model for a member's attendance list."""

    event_id: int
    event_name: str
    event_date: date
    points: int
