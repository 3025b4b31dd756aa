from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import Table, insert
from sqlalchemy.engine import Connection, Result
from sqlalchemy.exc import IntegrityError

# MySQL ER_DUP_ENTRY; SQLite extended result codes for UNIQUE / PRIMARY KEY.
_MYSQL_DUPLICATE_ENTRY = 1062
_SQLITE_DUPLICATE_NAMES = frozenset({"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"})


def fetchone(result: Result) -> Optional[Dict[str, Any]]:
    row = result.mappings().first()
    return dict(row) if row else None


def fetchall(result: Result) -> List[Dict[str, Any]]:
    return [dict(r) for r in result.mappings().all()]


def is_duplicate_key(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "errno", None) == _MYSQL_DUPLICATE_ENTRY:
        return True
    return getattr(orig, "sqlite_errorname", None) in _SQLITE_DUPLICATE_NAMES


def insert_unique(conn: Connection, table: Table, values: Mapping[str, Any]) -> bool:
    """Insert one row unless it collides with a unique key; True when written.

    The check and the write are one statement, so two concurrent callers can
    never both insert the same key. Only the unique-key collision is skipped:
    foreign key, CHECK and NOT NULL failures still raise.
    """

    try:
        with conn.begin_nested():
            conn.execute(insert(table).values(**values))
    except IntegrityError as exc:
        if not is_duplicate_key(exc):
            raise
        return False
    return True
