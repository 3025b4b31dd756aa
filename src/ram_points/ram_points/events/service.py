from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Sequence

from ..aggregation.aggregator import Aggregator
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import coerce_date
from ..common.validators import require_int, require_non_empty
from ..core.constants import DEFAULT_EVENT_POINTS, MIN_EVENT_POINTS
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..imports.importer import BulkImporter, ImportSummary
from .model import Event
from .repository import EventRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventDeleteSummary:
    event_id: int
    reversed_points: int
    records_removed: int
    clamped_members: tuple[int, ...] = ()

    def to_dict(self) -> dict:
        return {
            "eventId": self.event_id,
            "reversedPoints": self.reversed_points,
            "recordsRemoved": self.records_removed,
            "clampedMembers": list(self.clamped_members),
        }


class EventService:
    """Event lifecycle: nonexistent -> active -> deleted.

    Deleting an event removes its attendance rows and takes back exactly the
    points those rows granted, all in one transaction.
    """

    def __init__(
        self,
        db: DatabaseConnection,
        events: EventRepository,
        attendance: AttendanceRepository,
        aggregator: Aggregator,
        importer: BulkImporter,
    ):
        self._db = db
        self._events = events
        self._attendance = attendance
        self._aggregator = aggregator
        self._importer = importer

    def create_event(
        self,
        *,
        name: str,
        event_date: date | datetime | str,
        points: Any = DEFAULT_EVENT_POINTS,
    ) -> Event:
        name = require_non_empty(name, "Event name")
        day = coerce_date(event_date, "Event date")
        points = require_int(points, "Points", minimum=MIN_EVENT_POINTS)

        event_id = self._events.create_event(name=name, event_date=day, points=points)
        logger.info("Created event %s %r on %s worth %s points", event_id, name, day, points)
        return Event(event_id=event_id, name=name, event_date=day, points=points)

    def create_event_with_roster(
        self,
        *,
        name: str,
        event_date: date | datetime | str,
        points: Any,
        rows: Iterable[Mapping[str, Any]],
    ) -> tuple[Event, ImportSummary]:
        # The event is committed first; roster rows then commit one by one.
        event = self.create_event(name=name, event_date=event_date, points=points)
        summary = self._importer.import_rows(event.event_id, rows)
        return event, summary

    def get_event(self, event_id: int) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise NotFoundError("Event not found")
        return event

    def list_events(self) -> Sequence[Event]:
        return self._events.list_all()

    def delete_event(self, event_id: int) -> EventDeleteSummary:
        with self._db.transaction():
            # The event lock makes concurrent grants and imports for it wait, so
            # the rows removed below are the complete set of records to reverse.
            event = self._events.lock_by_id(event_id)
            if not event:
                raise NotFoundError("Event not found")

            removed = self._attendance.delete_by_event(event_id)
            clamped = []
            for record in removed:
                adj = self._aggregator.apply_delta(record.member_id, event.event_date, -record.points)
                if adj.clamped:
                    clamped.append(record.member_id)

            self._events.delete_by_id(event_id)

        summary = EventDeleteSummary(
            event_id=event_id,
            reversed_points=sum(r.points for r in removed),
            records_removed=len(removed),
            clamped_members=tuple(clamped),
        )
        logger.info(
            "Deleted event %s: reversed %s points across %s records",
            event_id,
            summary.reversed_points,
            summary.records_removed,
        )
        return summary
