from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .aggregation.aggregator import Aggregator
from .attendance.service import AttendanceService
from .attendance.sql_attendance_repository import SqlAttendanceRepository
from .core.constants import DEFAULT_EMAIL_DOMAIN
from .database.connection import DBConfig, DatabaseConnection
from .events.service import EventService
from .events.sql_event_repository import SqlEventRepository
from .imports.importer import BulkImporter
from .members.service import MemberService
from .members.sql_member_repository import SqlMemberRepository
from .seeding.legacy_seed import LegacyRosterSeeder


@dataclass(frozen=True)
class Container:
    db: DatabaseConnection

    members_repo: SqlMemberRepository
    events_repo: SqlEventRepository
    attendance_repo: SqlAttendanceRepository

    aggregator: Aggregator
    member_service: MemberService
    attendance_service: AttendanceService
    importer: BulkImporter
    event_service: EventService
    seeder: LegacyRosterSeeder


def build_database(*, db_config: Optional[dict] = None, database_url: Optional[str] = None) -> DatabaseConnection:
    if database_url:
        return DatabaseConnection.from_url(database_url)
    if not db_config:
        raise ValueError("Either database_url or db_config is required")
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    return DatabaseConnection.from_config(config)


def build_container(
    *,
    db: Optional[DatabaseConnection] = None,
    db_config: Optional[dict] = None,
    database_url: Optional[str] = None,
    email_domain: str = DEFAULT_EMAIL_DOMAIN,
    strict_counters: bool = False,
) -> Container:
    db = db or build_database(db_config=db_config, database_url=database_url)

    members_repo = SqlMemberRepository(db)
    events_repo = SqlEventRepository(db)
    attendance_repo = SqlAttendanceRepository(db)

    aggregator = Aggregator(db, members_repo, attendance_repo, strict=strict_counters)
    member_service = MemberService(db, members_repo, attendance_repo, email_domain=email_domain)
    attendance_service = AttendanceService(db, attendance_repo, members_repo, events_repo, aggregator)
    importer = BulkImporter(db, events_repo, attendance_repo, member_service, aggregator)
    event_service = EventService(db, events_repo, attendance_repo, aggregator, importer)
    seeder = LegacyRosterSeeder(db, members_repo, events_repo, attendance_repo, aggregator)

    return Container(
        db=db,
        members_repo=members_repo,
        events_repo=events_repo,
        attendance_repo=attendance_repo,
        aggregator=aggregator,
        member_service=member_service,
        attendance_service=attendance_service,
        importer=importer,
        event_service=event_service,
        seeder=seeder,
    )
