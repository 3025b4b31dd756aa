from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    false,
    func,
)

from ..terms.classifier import term_counters

metadata = MetaData()


def _counter(name: str) -> Column:
    return Column(name, Integer, nullable=False, server_default="0")


members = Table(
    "members",
    metadata,
    Column("member_id", Integer, primary_key=True, autoincrement=True),
    Column("computing_id", String(64), nullable=False, unique=True),
    Column("name", String(120), nullable=False),
    Column("email", String(255), nullable=False),
    Column("is_exec", Boolean, nullable=False, server_default=false()),
    _counter("total_points"),
    *[_counter(name) for name in term_counters()],
    Column("password_hash", String(255), nullable=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    CheckConstraint("total_points >= 0", name="ck_members_total_points_non_negative"),
    *[CheckConstraint(f"{name} >= 0", name=f"ck_members_{name}_non_negative") for name in term_counters()],
)

events = Table(
    "events",
    metadata,
    Column("event_id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column("event_date", Date, nullable=False),
    Column("points", Integer, nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    CheckConstraint("points >= 1", name="ck_events_points_positive"),
)

event_attendance = Table(
    "event_attendance",
    metadata,
    Column("attendance_id", Integer, primary_key=True, autoincrement=True),
    Column("event_id", Integer, ForeignKey("events.event_id"), nullable=False),
    Column("member_id", Integer, ForeignKey("members.member_id"), nullable=False, index=True),
    Column("points", Integer, nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    UniqueConstraint("event_id", "member_id", name="uq_event_attendance_event_member"),
    CheckConstraint("points >= 0", name="ck_event_attendance_points_non_negative"),
)
