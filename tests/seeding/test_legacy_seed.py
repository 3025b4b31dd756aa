from __future__ import annotations

from datetime import date

import pytest

from src.ram_points.ram_points.core.exceptions import ValidationError
from src.ram_points.ram_points.members.model import PointTotals
from src.ram_points.ram_points.seeding.legacy_seed import parse_event_columns
from tests.helpers import assert_consistent

LEGACY_MEMBERS = [
    {"name": "Ada Lovelace", "computingId": "AL1X", "email": "al1x@virginia.edu", "isExec": True,
     "humpbackHike": 2, "septemberGBM": 2},
    {"name": "Bob Stone", "computingId": "bb2z", "email": "bb2z@virginia.edu", "humpbackHike": 0,
     "septemberGBM": 2},
    {"name": "Cy Young", "computingId": "cc3c", "email": "cc3c@virginia.edu"},
]


def test_seed_creates_events_members_and_credits(container):
    summary = container.seeder.seed(LEGACY_MEMBERS)

    assert summary.events_created == 2
    assert summary.members_created == 3
    assert summary.records_created == 3
    ada = container.member_service.get_by_computing_id("al1x")
    assert ada.is_exec is True
    # 2024 events fall outside the tracked terms.
    assert ada.totals == PointTotals(4, 0, 0)
    assert container.member_service.get_by_computing_id("cc3c").totals == PointTotals()
    assert_consistent(container)


def test_reseeding_changes_nothing(container):
    container.seeder.seed(LEGACY_MEMBERS)
    before = {m.computing_id: m.totals for m in container.member_service.list_members()}

    summary = container.seeder.seed(LEGACY_MEMBERS)

    assert (summary.events_created, summary.members_created, summary.records_created) == (0, 0, 0)
    assert summary.records_skipped == 3
    assert {m.computing_id: m.totals for m in container.member_service.list_members()} == before
    assert len(container.event_service.list_events()) == 2


def test_custom_event_columns(container):
    columns = parse_event_columns({"springHike": {"name": "Spring Hike", "date": "2025-03-15", "points": 3}})

    container.seeder.seed([{"name": "Ada", "computingId": "al1x", "email": "al1x@virginia.edu", "springHike": 3}], columns)

    assert columns["springHike"].event_date == date(2025, 3, 15)
    assert container.member_service.get_by_computing_id("al1x").totals == PointTotals(3, 3, 0)


def test_parse_event_columns_rejects_bad_points():
    with pytest.raises(ValidationError):
        parse_event_columns({"x": {"name": "X", "date": "2025-03-15", "points": 0}})
