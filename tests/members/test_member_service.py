from __future__ import annotations

import pytest

from src.ram_points.ram_points.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.ram_points.ram_points.members.model import PointTotals
from tests.helpers import roster


def test_add_member_starts_with_zero_counters(container):
    member = container.member_service.add_member(
        name="Ada Lovelace", computing_id=" AL1X ", email="Ada@Virginia.edu", is_exec=True
    )

    assert member.computing_id == "al1x"
    assert member.email == "ada@virginia.edu"
    assert member.is_exec is True
    assert member.totals == PointTotals()


def test_add_member_rejects_duplicate_computing_id(container):
    container.member_service.add_member(name="Ada", computing_id="al1x", email="al1x@virginia.edu")

    with pytest.raises(ConflictError):
        container.member_service.add_member(name="Other Ada", computing_id="AL1X", email="x@virginia.edu")
    assert len(container.member_service.list_members()) == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "computing_id": "al1x", "email": "al1x@virginia.edu"},
        {"name": "Ada", "computing_id": "  ", "email": "al1x@virginia.edu"},
        {"name": "Ada", "computing_id": "al1x", "email": "not-an-email"},
    ],
)
def test_add_member_validation(container, kwargs):
    with pytest.raises(ValidationError):
        container.member_service.add_member(**kwargs)


def test_resolve_or_create_is_idempotent(container):
    first, created = container.member_service.resolve_or_create(name="Bob", computing_id="BB2Z")
    again, created_again = container.member_service.resolve_or_create(name="Robert", computing_id="bb2z")

    assert created is True
    assert created_again is False
    assert again == first
    assert first.email == "bb2z@virginia.edu"


def test_search_matches_name_or_computing_id(container):
    container.member_service.add_member(name="Ada Lovelace", computing_id="al1x", email="al1x@virginia.edu")
    container.member_service.add_member(name="Bob Stone", computing_id="bb2z", email="bb2z@virginia.edu")

    assert [m.computing_id for m in container.member_service.search("love")] == ["al1x"]
    assert [m.computing_id for m in container.member_service.search("BB2")] == ["bb2z"]
    assert len(container.member_service.search("  ")) == 2


def test_get_member_missing(container):
    with pytest.raises(NotFoundError):
        container.member_service.get_member(99)
    with pytest.raises(NotFoundError):
        container.member_service.get_by_computing_id("zz9z")


def test_delete_member_removes_their_ledger_rows(container, spring_event, fall_event):
    container.importer.import_rows(spring_event.event_id, roster(("Ada", "al1x"), ("Bob", "bb2z")))
    container.importer.import_rows(fall_event.event_id, roster(("Ada", "al1x")))
    ada = container.member_service.get_by_computing_id("al1x")

    summary = container.member_service.delete_member(ada.member_id)

    assert (summary.records_removed, summary.points_removed) == (2, 5)
    assert container.attendance_repo.list_for_member(ada.member_id) == []
    assert [r.member_id for r in container.attendance_repo.list_for_event(spring_event.event_id)] == [
        container.member_service.get_by_computing_id("bb2z").member_id
    ]
    with pytest.raises(NotFoundError):
        container.member_service.delete_member(ada.member_id)
