from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Event:
    """Domain entity: an event worth ``points`` per attendee by default."""

    event_id: int
    name: str
    event_date: date
    points: int
