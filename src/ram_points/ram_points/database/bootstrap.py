from __future__ import annotations

from dataclasses import dataclass

import mysql.connector
from sqlalchemy import delete, func, inspect, select

from .connection import DatabaseConnection
from .schema import event_attendance, events, members, metadata


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "ram_points")),
    )


def ensure_database_exists(db_config: dict) -> None:
    """Create the MySQL database itself (tables are created by :func:`create_schema`)."""

    target = _as_target(db_config)
    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def create_schema(db: DatabaseConnection) -> None:
    # Idempotent: create_all skips tables that already exist.
    metadata.create_all(db.engine)


def list_tables(db: DatabaseConnection) -> list[str]:
    return sorted(inspect(db.engine).get_table_names())


def reset_data(db: DatabaseConnection) -> dict[str, int]:
    """Delete every row, children first, and return how many rows each table lost."""

    removed: dict[str, int] = {}
    with db.transaction() as conn:
        for table in (event_attendance, events, members):
            removed[table.name] = conn.execute(delete(table)).rowcount
    return removed


def count_rows(db: DatabaseConnection) -> dict[str, int]:
    with db.transaction() as conn:
        return {
            table.name: int(conn.execute(select(func.count()).select_from(table)).scalar_one())
            for table in (members, events, event_attendance)
        }
