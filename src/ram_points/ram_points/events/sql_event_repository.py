from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import delete, insert, select

from ..common.datetime_utils import coerce_date
from ..database.connection import DatabaseConnection
from ..database.schema import events
from ..database.sql_base import fetchall, fetchone
from .model import Event
from .repository import EventRepository

_EVENT_COLUMNS = (events.c.event_id, events.c.name, events.c.event_date, events.c.points)


def _to_event(r: Mapping[str, Any]) -> Event:
    return Event(
        event_id=int(r["event_id"]),
        name=r["name"],
        event_date=coerce_date(r["event_date"]),
        points=int(r["points"]),
    )


class SqlEventRepository(EventRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get_by_id(self, event_id: int) -> Optional[Event]:
        with self._db.transaction() as conn:
            r = fetchone(conn.execute(select(*_EVENT_COLUMNS).where(events.c.event_id == int(event_id))))
            return _to_event(r) if r else None

    def lock_by_id(self, event_id: int) -> Optional[Event]:
        with self._db.transaction() as conn:
            r = fetchone(
                conn.execute(
                    select(*_EVENT_COLUMNS).where(events.c.event_id == int(event_id)).with_for_update()
                )
            )
            return _to_event(r) if r else None

    def get_by_name(self, name: str) -> Optional[Event]:
        with self._db.transaction() as conn:
            r = fetchone(
                conn.execute(
                    select(*_EVENT_COLUMNS).where(events.c.name == name).order_by(events.c.event_id).limit(1)
                )
            )
            return _to_event(r) if r else None

    def create_event(self, *, name: str, event_date: date, points: int) -> int:
        with self._db.transaction() as conn:
            result = conn.execute(insert(events).values(name=name, event_date=event_date, points=int(points)))
            return int(result.inserted_primary_key[0])

    def delete_by_id(self, event_id: int) -> bool:
        with self._db.transaction() as conn:
            result = conn.execute(delete(events).where(events.c.event_id == int(event_id)))
            return result.rowcount > 0

    def list_all(self) -> Sequence[Event]:
        with self._db.transaction() as conn:
            rows = fetchall(
                conn.execute(select(*_EVENT_COLUMNS).order_by(events.c.event_date.desc(), events.c.event_id.desc()))
            )
            return [_to_event(r) for r in rows]
