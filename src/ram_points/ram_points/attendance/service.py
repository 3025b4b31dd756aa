from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..aggregation.aggregator import Aggregator
from ..common.validators import require_int
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..events.repository import EventRepository
from ..members.repository import MemberRepository
from .model import AttendanceHistoryRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GrantResult:
    event_id: int
    member_id: int
    points: int
    previous_points: Optional[int]
    created: bool
    clamped: bool = False

    @property
    def delta(self) -> int:
        return self.points - (self.previous_points or 0)


class AttendanceService:
    """Use case: mark members present and edit the points they were granted."""

    def __init__(
        self,
        db: DatabaseConnection,
        attendance: AttendanceRepository,
        members: MemberRepository,
        events: EventRepository,
        aggregator: Aggregator,
    ):
        self._db = db
        self._attendance = attendance
        self._members = members
        self._events = events
        self._aggregator = aggregator

    def _require_pair(self, event_id: int, member_id: int):
        event = self._events.get_by_id(event_id)
        if not event:
            raise NotFoundError("Event not found")
        if not self._members.get_by_id(member_id):
            raise NotFoundError("Member not found")
        return event

    def grant_attendance(self, *, event_id: int, member_id: int, points: Optional[int] = None) -> GrantResult:
        """Create the attendance record, or move an existing one to ``points``."""

        with self._db.transaction():
            event = self._require_pair(event_id, member_id)
            points = event.points if points is None else require_int(points, "Points", minimum=0)

            if self._attendance.create_if_absent(event_id=event_id, member_id=member_id, points=points):
                adj = self._aggregator.apply_delta(member_id, event.event_date, points)
                result = GrantResult(event_id, member_id, points, None, created=True, clamped=adj.clamped)
            else:
                result = self._update_points(event, member_id, points)

        logger.info("Attendance for member %s at event %s is now %s points", member_id, event_id, points)
        return result

    def set_points(self, *, event_id: int, member_id: int, points: int) -> GrantResult:
        points = require_int(points, "Points", minimum=0)
        with self._db.transaction():
            event = self._require_pair(event_id, member_id)
            return self._update_points(event, member_id, points)

    def _update_points(self, event, member_id: int, points: int) -> GrantResult:
        previous = self._attendance.set_points(event_id=event.event_id, member_id=member_id, points=points)
        adj = self._aggregator.apply_delta(member_id, event.event_date, points - previous)
        return GrantResult(event.event_id, member_id, points, previous, created=False, clamped=adj.clamped)

    def history_for_member(self, member_id: int) -> Sequence[AttendanceHistoryRow]:
        if not self._members.get_by_id(member_id):
            raise NotFoundError("Member not found")
        return self._attendance.list_for_member(member_id)
