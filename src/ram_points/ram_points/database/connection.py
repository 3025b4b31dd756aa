from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.pool import StaticPool

from ..core.exceptions import StoreError, StoreUnavailableError

SQLITE_BUSY_TIMEOUT = 30


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    def url(self) -> URL:
        return URL.create(
            "mysql+mysqlconnector",
            username=self.user,
            password=self.password,
            host=self.host,
            port=int(self.port),
            database=self.database,
        )


def _on_sqlite_connect(dbapi_conn, _record) -> None:
    # SQLAlchemy emits BEGIN itself (see _begin_sqlite_immediate).
    dbapi_conn.isolation_level = None
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


def _begin_sqlite_immediate(conn: Connection) -> None:
    # SQLite has no SELECT ... FOR UPDATE; taking the write lock at BEGIN
    # serializes writers so locking reads hold for the whole transaction.
    conn.exec_driver_sql("BEGIN IMMEDIATE")


class DatabaseConnection:
    """Engine wrapper handing out transactional connections.

    Calls to :meth:`transaction` nest: an inner call on the same thread joins
    the outer transaction, so a service can group a ledger write and its
    counter update and the repositories it calls stay unaware of it.
    """

    def __init__(self, engine: Engine):
        self._engine = engine
        self._local = threading.local()

    @classmethod
    def from_config(cls, config: DBConfig) -> "DatabaseConnection":
        return cls(create_engine(config.url(), pool_pre_ping=True))

    @classmethod
    def from_url(cls, url: str) -> "DatabaseConnection":
        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT}}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection, otherwise every checkout sees an empty database.
                kwargs["poolclass"] = StaticPool
            engine = create_engine(url, **kwargs)
            event.listen(engine, "connect", _on_sqlite_connect)
            event.listen(engine, "begin", _begin_sqlite_immediate)
            return cls(engine)
        return cls(create_engine(url, pool_pre_ping=True))

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def dialect_name(self) -> str:
        return self._engine.dialect.name

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        current = getattr(self._local, "conn", None)
        if current is not None:
            yield current
            return

        try:
            with self._engine.begin() as conn:
                self._local.conn = conn
                try:
                    yield conn
                finally:
                    self._local.conn = None
        except OperationalError as exc:
            raise StoreUnavailableError(f"Database unavailable: {exc}") from exc
        except DBAPIError as exc:
            if exc.connection_invalidated:
                raise StoreUnavailableError(f"Database connection lost: {exc}") from exc
            raise StoreError(f"Database error: {exc}") from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"Database error: {exc}") from exc

    def dispose(self) -> None:
        self._engine.dispose()
