from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import normalize_computing_id, require_non_empty
from ..core.constants import DEFAULT_EMAIL_DOMAIN, MAX_SEARCH_RESULTS
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from .model import Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemberDeleteSummary:
    member_id: int
    records_removed: int
    points_removed: int


class MemberService:
    """Use case: manage members (exec dashboard) and resolve roster rows to members."""

    def __init__(
        self,
        db: DatabaseConnection,
        members: MemberRepository,
        attendance: AttendanceRepository,
        *,
        email_domain: str = DEFAULT_EMAIL_DOMAIN,
    ):
        self._db = db
        self._members = members
        self._attendance = attendance
        self._email_domain = email_domain

    def default_email(self, computing_id: str) -> str:
        return f"{computing_id}@{self._email_domain}"

    def add_member(self, *, name: str, computing_id: str, email: str, is_exec: bool = False) -> Member:
        name = require_non_empty(name, "Name")
        computing_id = normalize_computing_id(computing_id)
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email is invalid")

        with self._db.transaction():
            if not self._members.insert_if_absent(
                computing_id=computing_id, name=name, email=email, is_exec=is_exec
            ):
                raise ConflictError("A member with this computing ID already exists")
            member = self._members.get_by_computing_id(computing_id)

        logger.info("Added member %s (%s)", member.member_id, computing_id)
        return member

    def resolve_or_create(self, *, name: str, computing_id: str) -> tuple[Member, bool]:
        """Find a member by computing id, creating one with zero counters if absent."""

        computing_id = normalize_computing_id(computing_id)
        name = require_non_empty(name, "Name")

        with self._db.transaction():
            created = self._members.insert_if_absent(
                computing_id=computing_id,
                name=name,
                email=self.default_email(computing_id),
            )
            member = self._members.get_by_computing_id(computing_id)
        return member, created

    def get_member(self, member_id: int) -> Member:
        member = self._members.get_by_id(member_id)
        if not member:
            raise NotFoundError("Member not found")
        return member

    def get_by_computing_id(self, computing_id: str) -> Member:
        member = self._members.get_by_computing_id(normalize_computing_id(computing_id))
        if not member:
            raise NotFoundError("Member not found")
        return member

    def list_members(self) -> Sequence[Member]:
        return self._members.list_all()

    def search(self, query: Optional[str]) -> Sequence[Member]:
        query = (query or "").strip()
        if not query:
            return self._members.list_all()
        return self._members.search(query, limit=MAX_SEARCH_RESULTS)

    def delete_member(self, member_id: int) -> MemberDeleteSummary:
        with self._db.transaction():
            if not self._members.get_by_id(member_id):
                raise NotFoundError("Member not found")

            removed = self._attendance.delete_by_member(member_id)
            for record in removed:
                logger.info(
                    "Removing attendance of member %s at event %s (%s points)",
                    member_id,
                    record.event_id,
                    record.points,
                )
            self._members.delete_by_id(member_id)

        summary = MemberDeleteSummary(
            member_id=member_id,
            records_removed=len(removed),
            points_removed=sum(r.points for r in removed),
        )
        logger.info("Deleted member %s (%s attendance records)", member_id, summary.records_removed)
        return summary
