from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from ..aggregation.aggregator import Aggregator
from ..attendance.repository import AttendanceRepository
from ..core.exceptions import DomainError, NotFoundError, StoreUnavailableError, ValidationError
from ..database.connection import DatabaseConnection
from ..events.model import Event
from ..events.repository import EventRepository
from ..members.service import MemberService
from .rows import parse_row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowError:
    row_number: int
    reason: str


@dataclass
class ImportSummary:
    event_id: int
    created: int = 0
    credited: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[RowError] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "eventId": self.event_id,
            "created": self.created,
            "credited": self.credited,
            "skipped": self.skipped,
            "failed": self.failed,
            "errors": [{"row": e.row_number, "reason": e.reason} for e in self.errors],
        }


class BulkImporter:
    """Credit an event's default points to every member listed in a roster.

    Re-importing the same roster never double-credits: the ledger's unique
    (event, member) key decides whether a row earns points.
    """

    def __init__(
        self,
        db: DatabaseConnection,
        events: EventRepository,
        attendance: AttendanceRepository,
        member_service: MemberService,
        aggregator: Aggregator,
    ):
        self._db = db
        self._events = events
        self._attendance = attendance
        self._member_service = member_service
        self._aggregator = aggregator

    def import_rows(self, event_id: int, rows: Iterable[Mapping[str, Any]]) -> ImportSummary:
        event = self._events.get_by_id(event_id)
        if not event:
            raise NotFoundError("Event not found")

        summary = ImportSummary(event_id=event.event_id)
        for row_number, row in enumerate(rows, start=1):
            try:
                self._import_row(event, row, summary)
            except ValidationError as e:
                summary.skipped += 1
                summary.errors.append(RowError(row_number, str(e)))
                logger.info("Skipping roster row %s for event %s: %s", row_number, event.event_id, e)
            except StoreUnavailableError:
                # Fatal for the batch; rows committed so far stay committed.
                logger.error(
                    "Aborting roster import for event %s at row %s: %s rows credited so far",
                    event.event_id,
                    row_number,
                    summary.credited,
                )
                raise
            except DomainError as e:
                summary.failed += 1
                summary.errors.append(RowError(row_number, str(e)))
                logger.error("Failed to import roster row %s for event %s: %s", row_number, event.event_id, e)

        logger.info(
            "Imported roster for event %s: created=%s credited=%s skipped=%s failed=%s",
            event.event_id,
            summary.created,
            summary.credited,
            summary.skipped,
            summary.failed,
        )
        return summary

    def _import_row(self, event: Event, row: Mapping[str, Any], summary: ImportSummary) -> None:
        parsed = parse_row(row)

        # One transaction per row: a failure rolls back this row's member and credit only.
        with self._db.transaction():
            member, created = self._member_service.resolve_or_create(
                name=parsed.name, computing_id=parsed.computing_id
            )
            inserted = self._attendance.create_if_absent(
                event_id=event.event_id, member_id=member.member_id, points=event.points
            )
            if inserted:
                self._aggregator.apply_delta(member.member_id, event.event_date, event.points)

        if created:
            summary.created += 1
        if inserted:
            summary.credited += 1
        else:
            summary.skipped += 1
