from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Member, PointTotals


class MemberRepository(Protocol):
    """Repository interface for members.

    Services depend on this interface, not on a concrete database. Counter
    columns are written only through the point-specific methods below.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def get_by_computing_id(self, computing_id: str) -> Optional[Member]:
        raise NotImplementedError

    def insert_if_absent(self, *, computing_id: str, name: str, email: str, is_exec: bool = False) -> bool:
        """Atomically insert a member with zero counters; False if the computing id is taken."""

        raise NotImplementedError

    def update_profile(self, member_id: int, *, name: str, email: str, is_exec: bool) -> bool:
        raise NotImplementedError

    def delete_by_id(self, member_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Member]:
        raise NotImplementedError

    def search(self, query: str, *, limit: int) -> Sequence[Member]:
        raise NotImplementedError

    def list_ids(self) -> Sequence[int]:
        raise NotImplementedError

    def add_points(self, member_id: int, deltas: dict[str, int], *, clamp: bool) -> bool:
        """Add ``deltas`` (column -> delta) in one statement.

        With ``clamp=False`` the update only applies when no column would go
        negative and returns False otherwise. With ``clamp=True`` each column
        is floored at zero. Returns False when no row matched.
        """

        raise NotImplementedError

    def lock_totals(self, member_id: int) -> Optional[PointTotals]:
        raise NotImplementedError

    def overwrite_totals(self, member_id: int, totals: PointTotals) -> bool:
        raise NotImplementedError
