from __future__ import annotations

import pytest

from src.ram_points.ram_points.core.exceptions import ConflictError, NotFoundError, StoreError


@pytest.fixture
def member(container):
    return container.member_service.add_member(name="Ada Lovelace", computing_id="al1x", email="al1x@virginia.edu")


def test_create_if_absent_inserts_once(container, spring_event, member):
    repo = container.attendance_repo

    assert repo.create_if_absent(event_id=spring_event.event_id, member_id=member.member_id, points=3) is True
    assert repo.create_if_absent(event_id=spring_event.event_id, member_id=member.member_id, points=7) is False

    records = repo.list_for_event(spring_event.event_id)
    assert len(records) == 1
    assert records[0].points == 3


def test_insert_new_raises_conflict_for_taken_pair(container, spring_event, member):
    repo = container.attendance_repo
    repo.insert_new(event_id=spring_event.event_id, member_id=member.member_id, points=3)

    with pytest.raises(ConflictError):
        repo.insert_new(event_id=spring_event.event_id, member_id=member.member_id, points=3)


def test_set_points_returns_previous_value(container, spring_event, member):
    repo = container.attendance_repo
    repo.create_if_absent(event_id=spring_event.event_id, member_id=member.member_id, points=3)

    previous = repo.set_points(event_id=spring_event.event_id, member_id=member.member_id, points=5)

    assert previous == 3
    assert repo.get(spring_event.event_id, member.member_id).points == 5


def test_set_points_on_missing_record_raises(container, spring_event, member):
    with pytest.raises(NotFoundError):
        container.attendance_repo.set_points(event_id=spring_event.event_id, member_id=member.member_id, points=5)


def test_delete_by_event_returns_removed_records(container, spring_event, fall_event, member):
    repo = container.attendance_repo
    repo.create_if_absent(event_id=spring_event.event_id, member_id=member.member_id, points=3)
    repo.create_if_absent(event_id=fall_event.event_id, member_id=member.member_id, points=2)

    removed = repo.delete_by_event(spring_event.event_id)

    assert [(r.event_id, r.member_id, r.points) for r in removed] == [(spring_event.event_id, member.member_id, 3)]
    assert repo.list_for_event(spring_event.event_id) == []
    assert len(repo.list_for_event(fall_event.event_id)) == 1


def test_list_for_member_is_newest_first(container, spring_event, fall_event, member):
    repo = container.attendance_repo
    repo.create_if_absent(event_id=spring_event.event_id, member_id=member.member_id, points=3)
    repo.create_if_absent(event_id=fall_event.event_id, member_id=member.member_id, points=2)

    history = repo.list_for_member(member.member_id)

    assert [h.event_name for h in history] == ["Fall Hike", "Spring GBM"]
    assert history[0].event_date.isoformat() == "2025-09-20"


def test_create_if_absent_raises_for_missing_event(container, member):
    with pytest.raises(StoreError):
        container.attendance_repo.create_if_absent(event_id=999, member_id=member.member_id, points=3)
    assert container.attendance_repo.list_for_member(member.member_id) == []


def test_create_if_absent_raises_for_negative_points(container, spring_event, member):
    with pytest.raises(StoreError):
        container.attendance_repo.create_if_absent(
            event_id=spring_event.event_id, member_id=member.member_id, points=-1
        )
    assert container.attendance_repo.get(spring_event.event_id, member.member_id) is None
