from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import delete, select, update

from ..common.datetime_utils import coerce_date
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.schema import event_attendance, events
from ..database.sql_base import fetchall, fetchone, insert_unique
from .model import AttendanceHistoryRow, AttendanceRecord, LedgerRow
from .repository import AttendanceRepository

_RECORD_COLUMNS = (
    event_attendance.c.attendance_id,
    event_attendance.c.event_id,
    event_attendance.c.member_id,
    event_attendance.c.points,
)


def _to_record(r: Mapping[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        event_id=int(r["event_id"]),
        member_id=int(r["member_id"]),
        points=int(r["points"]),
    )


def _pair(event_id: int, member_id: int):
    return (event_attendance.c.event_id == int(event_id)) & (event_attendance.c.member_id == int(member_id))


class SqlAttendanceRepository(AttendanceRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get(self, event_id: int, member_id: int) -> Optional[AttendanceRecord]:
        with self._db.transaction() as conn:
            r = fetchone(conn.execute(select(*_RECORD_COLUMNS).where(_pair(event_id, member_id))))
            return _to_record(r) if r else None

    def create_if_absent(self, *, event_id: int, member_id: int, points: int) -> bool:
        with self._db.transaction() as conn:
            return insert_unique(
                conn,
                event_attendance,
                {"event_id": int(event_id), "member_id": int(member_id), "points": int(points)},
            )

    def insert_new(self, *, event_id: int, member_id: int, points: int) -> int:
        with self._db.transaction():
            if not self.create_if_absent(event_id=event_id, member_id=member_id, points=points):
                raise ConflictError(f"Attendance already recorded for event {event_id}, member {member_id}")
            record = self.get(event_id, member_id)
            return record.attendance_id

    def set_points(self, *, event_id: int, member_id: int, points: int) -> int:
        with self._db.transaction() as conn:
            r = fetchone(
                conn.execute(
                    select(event_attendance.c.points).where(_pair(event_id, member_id)).with_for_update()
                )
            )
            if not r:
                raise NotFoundError(f"No attendance for event {event_id}, member {member_id}")
            conn.execute(update(event_attendance).where(_pair(event_id, member_id)).values(points=int(points)))
            return int(r["points"])

    def list_for_event(self, event_id: int) -> Sequence[AttendanceRecord]:
        with self._db.transaction() as conn:
            rows = fetchall(
                conn.execute(
                    select(*_RECORD_COLUMNS)
                    .where(event_attendance.c.event_id == int(event_id))
                    .order_by(event_attendance.c.attendance_id)
                )
            )
            return [_to_record(r) for r in rows]

    def list_for_member(self, member_id: int) -> Sequence[AttendanceHistoryRow]:
        with self._db.transaction() as conn:
            rows = fetchall(
                conn.execute(
                    select(events.c.event_id, events.c.name, events.c.event_date, event_attendance.c.points)
                    .join(events, events.c.event_id == event_attendance.c.event_id)
                    .where(event_attendance.c.member_id == int(member_id))
                    .order_by(events.c.event_date.desc(), events.c.event_id.desc())
                )
            )
            return [
                AttendanceHistoryRow(
                    event_id=int(r["event_id"]),
                    event_name=r["name"],
                    event_date=coerce_date(r["event_date"]),
                    points=int(r["points"]),
                )
                for r in rows
            ]

    def ledger_rows_for_member(self, member_id: int) -> Sequence[LedgerRow]:
        with self._db.transaction() as conn:
            rows = fetchall(
                conn.execute(
                    select(event_attendance.c.points, events.c.event_date)
                    .join(events, events.c.event_id == event_attendance.c.event_id)
                    .where(event_attendance.c.member_id == int(member_id))
                )
            )
            return [LedgerRow(points=int(r["points"]), event_date=coerce_date(r["event_date"])) for r in rows]

    def delete_by_event(self, event_id: int) -> Sequence[AttendanceRecord]:
        with self._db.transaction() as conn:
            rows = fetchall(
                conn.execute(
                    select(*_RECORD_COLUMNS)
                    .where(event_attendance.c.event_id == int(event_id))
                    .order_by(event_attendance.c.attendance_id)
                    .with_for_update()
                )
            )
            conn.execute(delete(event_attendance).where(event_attendance.c.event_id == int(event_id)))
            return [_to_record(r) for r in rows]

    def delete_by_member(self, member_id: int) -> Sequence[AttendanceRecord]:
        with self._db.transaction() as conn:
            rows = fetchall(
                conn.execute(
                    select(*_RECORD_COLUMNS)
                    .where(event_attendance.c.member_id == int(member_id))
                    .order_by(event_attendance.c.attendance_id)
                    .with_for_update()
                )
            )
            conn.execute(delete(event_attendance).where(event_attendance.c.member_id == int(member_id)))
            return [_to_record(r) for r in rows]
