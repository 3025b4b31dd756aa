from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Event


class EventRepository(Protocol):
    def get_by_id(self, event_id: int) -> Optional[Event]:
        raise NotImplementedError

    def lock_by_id(self, event_id: int) -> Optional[Event]:
        """Fetch the event and hold a row lock on it until the transaction ends."""
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Event]:
        raise NotImplementedError

    def create_event(self, *, name: str, event_date: date, points: int) -> int:
        raise NotImplementedError

    def delete_by_id(self, event_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Event]:
        raise NotImplementedError
