"""Seed members and attendance from a legacy JSON roster.

The legacy export has one object per member with a numeric column per past
event, e.g. ``{"computingId": "abc1de", "humpbackHike": 2, ...}``. Every
positive column becomes an attendance record, credited the same way a roster
import credits it, so running the seed twice changes nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Sequence

from ..aggregation.aggregator import Aggregator
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import coerce_date
from ..common.validators import normalize_computing_id, require_int, require_non_empty
from ..database.connection import DatabaseConnection
from ..events.model import Event
from ..events.repository import EventRepository
from ..members.repository import MemberRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LegacyEvent:
    name: str
    event_date: date
    points: int


# Events referenced by the original members.json export.
LEGACY_EVENTS: dict[str, LegacyEvent] = {
    "humpbackHike": LegacyEvent("Humpback Hike", date(2024, 9, 15), 2),
    "septemberGBM": LegacyEvent("September GBM", date(2024, 9, 1), 2),
}


@dataclass
class SeedSummary:
    events_created: int = 0
    members_created: int = 0
    members_updated: int = 0
    records_created: int = 0
    records_skipped: int = 0


class LegacyRosterSeeder:
    def __init__(
        self,
        db: DatabaseConnection,
        members: MemberRepository,
        events: EventRepository,
        attendance: AttendanceRepository,
        aggregator: Aggregator,
    ):
        self._db = db
        self._members = members
        self._events = events
        self._attendance = attendance
        self._aggregator = aggregator

    def _ensure_event(self, legacy: LegacyEvent, summary: SeedSummary) -> Event:
        existing = self._events.get_by_name(legacy.name)
        if existing:
            logger.info("Event %r already exists", legacy.name)
            return existing
        event_id = self._events.create_event(name=legacy.name, event_date=legacy.event_date, points=legacy.points)
        summary.events_created += 1
        logger.info("Created event %r (%s)", legacy.name, legacy.event_date)
        return Event(event_id=event_id, name=legacy.name, event_date=legacy.event_date, points=legacy.points)

    def seed(
        self,
        members: Sequence[Mapping[str, Any]],
        event_columns: Mapping[str, LegacyEvent] = LEGACY_EVENTS,
    ) -> SeedSummary:
        summary = SeedSummary()

        with self._db.transaction():
            events = {column: self._ensure_event(legacy, summary) for column, legacy in event_columns.items()}

            for entry in members:
                computing_id = normalize_computing_id(entry.get("computingId"))
                name = require_non_empty(entry.get("name"), "Name")
                email = require_non_empty(entry.get("email"), "Email").lower()
                is_exec = bool(entry.get("isExec", False))

                if self._members.insert_if_absent(
                    computing_id=computing_id, name=name, email=email, is_exec=is_exec
                ):
                    summary.members_created += 1
                    member = self._members.get_by_computing_id(computing_id)
                else:
                    member = self._members.get_by_computing_id(computing_id)
                    self._members.update_profile(member.member_id, name=name, email=email, is_exec=is_exec)
                    summary.members_updated += 1

                for column, event in events.items():
                    points = require_int(entry.get(column) or 0, column, minimum=0)
                    if points <= 0:
                        continue
                    if self._attendance.create_if_absent(
                        event_id=event.event_id, member_id=member.member_id, points=points
                    ):
                        self._aggregator.apply_delta(member.member_id, event.event_date, points)
                        summary.records_created += 1
                    else:
                        summary.records_skipped += 1

        logger.info(
            "Seeded %s events, %s new members, %s attendance records (%s already present)",
            len(event_columns),
            summary.members_created,
            summary.records_created,
            summary.records_skipped,
        )
        return summary


def parse_event_columns(raw: Mapping[str, Mapping[str, Any]]) -> dict[str, LegacyEvent]:
    """Build event column config from JSON, e.g. ``{"hike": {"name": ..., "date": ..., "points": 2}}``."""

    return {
        column: LegacyEvent(
            name=require_non_empty(cfg.get("name"), "Event name"),
            event_date=coerce_date(cfg.get("date"), "Event date"),
            points=require_int(cfg.get("points", 2), "Points", minimum=1),
        )
        for column, cfg in raw.items()
    }
