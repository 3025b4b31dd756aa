from __future__ import annotations

from datetime import date

import pytest

from src.ram_points.ram_points.container import Container, build_container
from src.ram_points.ram_points.database.bootstrap import create_schema
from src.ram_points.ram_points.database.connection import DatabaseConnection


@pytest.fixture
def db():
    database = DatabaseConnection.from_url("sqlite://")
    create_schema(database)
    yield database
    database.dispose()


@pytest.fixture
def container(db) -> Container:
    return build_container(db=db)


@pytest.fixture
def strict_container(db) -> Container:
    return build_container(db=db, strict_counters=True)


@pytest.fixture
def spring_event(container):
    return container.event_service.create_event(name="Spring GBM", event_date=date(2025, 2, 1), points=3)


@pytest.fixture
def fall_event(container):
    return container.event_service.create_event(name="Fall Hike", event_date=date(2025, 9, 20), points=2)


@pytest.fixture
def file_db(tmp_path):
    # Separate connections per thread; the in-memory fixture shares one.
    database = DatabaseConnection.from_url(f"sqlite:///{tmp_path / 'ram_points.db'}")
    create_schema(database)
    yield database
    database.dispose()


@pytest.fixture
def file_container(file_db) -> Container:
    return build_container(db=file_db)
