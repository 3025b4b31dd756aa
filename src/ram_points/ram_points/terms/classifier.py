"""Term buckets for event points.

Every component that needs to know which counter an event's points land in
goes through :func:`classify` and :func:`counter_for`; date ranges and counter
column names are not repeated anywhere else.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import coerce_date
from ..core.enums import Term


@dataclass(frozen=True)
class TermWindow:
    term: Term
    start: date  # inclusive
    end: date  # exclusive
    counter: str

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end


TERM_WINDOWS: tuple[TermWindow, ...] = (
    TermWindow(Term.SPRING_2025, date(2025, 1, 1), date(2025, 6, 1), "spring_2025_total"),
    TermWindow(Term.FALL_2025, date(2025, 8, 1), date(2026, 1, 1), "fall_2025_total"),
)

_COUNTERS = {w.term: w.counter for w in TERM_WINDOWS}


def classify(event_date: date | datetime | str) -> Term:
    day = coerce_date(event_date, "Event date")
    for window in TERM_WINDOWS:
        if window.contains(day):
            return window.term
    return Term.OTHER


def counter_for(term: Term) -> Optional[str]:
    """Member column holding the subtotal for ``term`` (None for OTHER)."""
    return _COUNTERS.get(term)


def term_counters() -> tuple[str, ...]:
    return tuple(w.counter for w in TERM_WINDOWS)
