from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceHistoryRow, AttendanceRecord, LedgerRow


class AttendanceRepository(Protocol):
    """Ledger store: at most one record per (event, member) pair."""

    def get(self, event_id: int, member_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_if_absent(self, *, event_id: int, member_id: int, points: int) -> bool:
        """Insert unless the pair is taken; returns whether a row was inserted."""

        raise NotImplementedError

    def insert_new(self, *, event_id: int, member_id: int, points: int) -> int:
        """Insert a record that must not exist yet; raises ConflictError otherwise."""

        raise NotImplementedError

    def set_points(self, *, event_id: int, member_id: int, points: int) -> int:
        """Overwrite the record's points and return the previous value."""

        raise NotImplementedError

    def list_for_event(self, event_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_member(self, member_id: int) -> Sequence[AttendanceHistoryRow]:
        raise NotImplementedError

    def ledger_rows_for_member(self, member_id: int) -> Sequence[LedgerRow]:
        raise NotImplementedError

    def delete_by_event(self, event_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def delete_by_member(self, member_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
