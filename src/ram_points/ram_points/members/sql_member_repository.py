from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import and_, case, delete, func, or_, select, update

from ..database.connection import DatabaseConnection
from ..database.schema import members
from ..database.sql_base import fetchall, fetchone, insert_unique
from .model import Member, PointTotals
from .repository import MemberRepository

_MEMBER_COLUMNS = (
    members.c.member_id,
    members.c.computing_id,
    members.c.name,
    members.c.email,
    members.c.is_exec,
    members.c.total_points,
    members.c.spring_2025_total,
    members.c.fall_2025_total,
)


def _to_member(r: Mapping[str, Any]) -> Member:
    return Member(
        member_id=int(r["member_id"]),
        computing_id=r["computing_id"],
        name=r["name"],
        email=r["email"],
        is_exec=bool(r["is_exec"]),
        total_points=int(r["total_points"]),
        spring_2025_total=int(r["spring_2025_total"]),
        fall_2025_total=int(r["fall_2025_total"]),
    )


class SqlMemberRepository(MemberRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with self._db.transaction() as conn:
            r = fetchone(conn.execute(select(*_MEMBER_COLUMNS).where(members.c.member_id == int(member_id))))
            return _to_member(r) if r else None

    def get_by_computing_id(self, computing_id: str) -> Optional[Member]:
        with self._db.transaction() as conn:
            r = fetchone(
                conn.execute(select(*_MEMBER_COLUMNS).where(members.c.computing_id == computing_id.lower()))
            )
            return _to_member(r) if r else None

    def insert_if_absent(self, *, computing_id: str, name: str, email: str, is_exec: bool = False) -> bool:
        with self._db.transaction() as conn:
            return insert_unique(
                conn,
                members,
                {"computing_id": computing_id.lower(), "name": name, "email": email, "is_exec": bool(is_exec)},
            )

    def update_profile(self, member_id: int, *, name: str, email: str, is_exec: bool) -> bool:
        with self._db.transaction() as conn:
            result = conn.execute(
                update(members)
                .where(members.c.member_id == int(member_id))
                .values(name=name, email=email, is_exec=bool(is_exec))
            )
            return result.rowcount > 0

    def delete_by_id(self, member_id: int) -> bool:
        with self._db.transaction() as conn:
            result = conn.execute(delete(members).where(members.c.member_id == int(member_id)))
            return result.rowcount > 0

    def list_all(self) -> Sequence[Member]:
        with self._db.transaction() as conn:
            rows = fetchall(conn.execute(select(*_MEMBER_COLUMNS).order_by(members.c.name, members.c.member_id)))
            return [_to_member(r) for r in rows]

    def search(self, query: str, *, limit: int) -> Sequence[Member]:
        pattern = f"%{query.lower()}%"
        with self._db.transaction() as conn:
            rows = fetchall(
                conn.execute(
                    select(*_MEMBER_COLUMNS)
                    .where(
                        or_(
                            func.lower(members.c.name).like(pattern),
                            func.lower(members.c.computing_id).like(pattern),
                            func.lower(members.c.email).like(pattern),
                        )
                    )
                    .order_by(members.c.name, members.c.member_id)
                    .limit(int(limit))
                )
            )
            return [_to_member(r) for r in rows]

    def list_ids(self) -> Sequence[int]:
        with self._db.transaction() as conn:
            return [int(v) for v in conn.execute(select(members.c.member_id).order_by(members.c.member_id)).scalars()]

    def add_points(self, member_id: int, deltas: dict[str, int], *, clamp: bool) -> bool:
        stmt = update(members).where(members.c.member_id == int(member_id))
        values = {}
        guards = []
        for column_name, delta in deltas.items():
            col = members.c[column_name]
            if clamp:
                values[column_name] = case((col + delta < 0, 0), else_=col + delta)
            else:
                values[column_name] = col + delta
                guards.append(col + delta >= 0)
        if guards:
            stmt = stmt.where(and_(*guards))

        with self._db.transaction() as conn:
            result = conn.execute(stmt.values(**values))
            return result.rowcount > 0

    def lock_totals(self, member_id: int) -> Optional[PointTotals]:
        with self._db.transaction() as conn:
            r = fetchone(
                conn.execute(
                    select(members.c.total_points, members.c.spring_2025_total, members.c.fall_2025_total)
                    .where(members.c.member_id == int(member_id))
                    .with_for_update()
                )
            )
            return PointTotals.from_row(r) if r else None

    def overwrite_totals(self, member_id: int, totals: PointTotals) -> bool:
        with self._db.transaction() as conn:
            result = conn.execute(
                update(members).where(members.c.member_id == int(member_id)).values(**totals.as_columns())
            )
            return result.rowcount > 0
