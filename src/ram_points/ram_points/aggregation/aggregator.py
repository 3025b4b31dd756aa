"""Member point counters as a materialized view over the attendance ledger.

``apply_delta`` is the incremental path used right after every ledger write;
``recompute_from_ledger`` rebuilds the counters from scratch and is the
authority when the two disagree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..core.enums import Term
from ..core.exceptions import CounterDriftError, NotFoundError
from ..database.connection import DatabaseConnection
from ..members.model import PointTotals
from ..members.repository import MemberRepository
from ..terms.classifier import classify, counter_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CounterAdjustment:
    member_id: int
    term: Term
    delta: int
    clamped: bool = False


@dataclass(frozen=True)
class RecomputeResult:
    member_id: int
    before: PointTotals
    after: PointTotals

    @property
    def drifted(self) -> bool:
        return self.before != self.after


def totals_from_ledger(rows) -> PointTotals:
    """Sum ledger rows into the three counters, bucketed by term."""

    columns = {"total_points": 0, "spring_2025_total": 0, "fall_2025_total": 0}
    for row in rows:
        columns["total_points"] += int(row.points)
        counter = counter_for(classify(row.event_date))
        if counter:
            columns[counter] += int(row.points)
    return PointTotals(**columns)


class Aggregator:
    def __init__(
        self,
        db: DatabaseConnection,
        members: MemberRepository,
        attendance: AttendanceRepository,
        *,
        strict: bool = False,
    ):
        self._db = db
        self._members = members
        self._attendance = attendance
        self._strict = bool(strict)

    @property
    def strict(self) -> bool:
        return self._strict

    def apply_delta(self, member_id: int, event_date: date | datetime | str, delta: int) -> CounterAdjustment:
        term = classify(event_date)
        delta = int(delta)
        if delta == 0:
            return CounterAdjustment(member_id=member_id, term=term, delta=0)

        deltas = {"total_points": delta}
        counter = counter_for(term)
        if counter:
            deltas[counter] = delta

        with self._db.transaction():
            if self._members.add_points(member_id, deltas, clamp=False):
                return CounterAdjustment(member_id=member_id, term=term, delta=delta)

            # Either the member is gone or the counters no longer match the ledger.
            if self._members.get_by_id(member_id) is None:
                raise NotFoundError(f"Member {member_id} not found")
            if self._strict:
                raise CounterDriftError(
                    f"Applying {delta} points ({term.value}) would make member {member_id}'s counters negative"
                )

            self._members.add_points(member_id, deltas, clamp=True)
            logger.warning(
                "Clamped counters at zero for member %s (delta=%s, term=%s); run a recompute to repair drift",
                member_id,
                delta,
                term.value,
            )
            return CounterAdjustment(member_id=member_id, term=term, delta=delta, clamped=True)

    def recompute_from_ledger(self, member_id: int) -> RecomputeResult:
        with self._db.transaction():
            before = self._members.lock_totals(member_id)
            if before is None:
                raise NotFoundError(f"Member {member_id} not found")

            after = totals_from_ledger(self._attendance.ledger_rows_for_member(member_id))
            if after != before:
                self._members.overwrite_totals(member_id, after)
                logger.warning("Repaired drifted counters for member %s: %s -> %s", member_id, before, after)
            return RecomputeResult(member_id=member_id, before=before, after=after)

    def check_member(self, member_id: int) -> RecomputeResult:
        """Compare a member's counters to the ledger without writing anything."""

        with self._db.transaction():
            member = self._members.get_by_id(member_id)
            if member is None:
                raise NotFoundError(f"Member {member_id} not found")
            expected = totals_from_ledger(self._attendance.ledger_rows_for_member(member_id))
            return RecomputeResult(member_id=member_id, before=member.totals, after=expected)

    def recompute_all(self, member_ids: Optional[Sequence[int]] = None) -> list[RecomputeResult]:
        """Rebuild every member's counters; returns only the members that had drifted."""

        ids = list(member_ids) if member_ids is not None else list(self._members.list_ids())
        drifted = [r for r in (self.recompute_from_ledger(mid) for mid in ids) if r.drifted]
        logger.info("Recomputed %s members, %s had drifted", len(ids), len(drifted))
        return drifted

    def find_drift(self) -> list[RecomputeResult]:
        return [r for r in (self.check_member(mid) for mid in self._members.list_ids()) if r.drifted]
