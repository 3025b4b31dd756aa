from __future__ import annotations

from src.ram_points.ram_points.aggregation.aggregator import totals_from_ledger
from src.ram_points.ram_points.container import Container
from src.ram_points.ram_points.members.model import PointTotals


def roster(*pairs: tuple[str, str]) -> list[dict]:
    return [{"Name": name, "Computing ID": cid} for name, cid in pairs]


def ledger_totals(container: Container, member_id: int) -> PointTotals:
    return totals_from_ledger(container.attendance_repo.ledger_rows_for_member(member_id))


def assert_consistent(container: Container) -> None:
    for member in container.members_repo.list_all():
        assert member.totals == ledger_totals(container, member.member_id), member
        assert min(member.totals.as_columns().values()) >= 0, member
