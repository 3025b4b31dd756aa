"""Operations racing each other on separate connections keep counters equal to the ledger."""

from __future__ import annotations

import threading
from datetime import date

from src.ram_points.ram_points.core.exceptions import NotFoundError
from src.ram_points.ram_points.imports.importer import BulkImporter, ImportSummary
from src.ram_points.ram_points.members.model import PointTotals
from src.ram_points.ram_points.members.service import MemberService
from tests.helpers import assert_consistent, roster

JOIN_TIMEOUT = 60


def run_together(*jobs):
    """Start every job at once on its own thread; return results or raised exceptions."""

    barrier = threading.Barrier(len(jobs))
    results: list = [None] * len(jobs)

    def worker(index, job):
        barrier.wait()
        try:
            results[index] = job()
        except Exception as exc:
            results[index] = exc

    threads = [threading.Thread(target=worker, args=(i, job)) for i, job in enumerate(jobs)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(JOIN_TIMEOUT)
        assert not t.is_alive()
    return results


def test_same_roster_imported_concurrently_credits_once(file_container):
    event = file_container.event_service.create_event(name="GBM", event_date=date(2025, 2, 1), points=3)
    sheet = roster(*[(f"Member {i}", f"mm{i}x") for i in range(6)])

    results = run_together(*[lambda: file_container.importer.import_rows(event.event_id, sheet)] * 4)

    assert all(isinstance(r, ImportSummary) for r in results), results
    assert sum(r.credited for r in results) == 6
    assert sum(r.created for r in results) == 6
    assert sum(r.failed for r in results) == 0
    assert len(file_container.attendance_repo.list_for_event(event.event_id)) == 6
    for member in file_container.member_service.list_members():
        assert member.totals == PointTotals(3, 3, 0)
    assert_consistent(file_container)


def test_import_racing_manual_edit_on_same_member(file_container):
    first = file_container.event_service.create_event(name="GBM", event_date=date(2025, 2, 1), points=3)
    second = file_container.event_service.create_event(name="Hike", event_date=date(2025, 9, 20), points=2)
    file_container.importer.import_rows(first.event_id, roster(("Ada", "al1x")))
    ada = file_container.member_service.get_by_computing_id("al1x")

    def edit():
        for points in range(12):
            file_container.attendance_service.set_points(
                event_id=first.event_id, member_id=ada.member_id, points=points % 7
            )

    def reimport():
        return [
            file_container.importer.import_rows(second.event_id, roster(("Ada", "al1x"), ("Bob", "bb2z")))
            for _ in range(3)
        ]

    edited, summaries = run_together(edit, reimport)

    assert edited is None
    assert sum(s.credited for s in summaries) == 2
    assert file_container.attendance_repo.get(second.event_id, ada.member_id).points == 2
    # Last edit leaves 11 % 7 == 4 points at the spring event.
    assert file_container.member_service.get_member(ada.member_id).totals == PointTotals(6, 4, 2)
    assert_consistent(file_container)


def test_delete_racing_import_leaves_no_orphaned_points(file_container):
    for round_number in range(5):
        event = file_container.event_service.create_event(
            name=f"Pop-up {round_number}", event_date=date(2025, 3, 1), points=4
        )
        file_container.importer.import_rows(event.event_id, roster(("Ada", "al1x")))

        deleted, imported = run_together(
            lambda: file_container.event_service.delete_event(event.event_id),
            lambda: file_container.importer.import_rows(event.event_id, roster(("Bob", "bb2z"), ("Cy", "cc3c"))),
        )

        assert not isinstance(deleted, Exception), deleted
        assert isinstance(imported, (ImportSummary, NotFoundError)), imported
        assert file_container.attendance_repo.list_for_event(event.event_id) == []
        assert_consistent(file_container)

    assert file_container.member_service.get_by_computing_id("al1x").totals == PointTotals()


def test_record_committed_while_delete_waits_is_reversed(file_container):
    event = file_container.event_service.create_event(name="GBM", event_date=date(2025, 2, 1), points=3)
    file_container.importer.import_rows(event.event_id, roster(("Ada", "al1x")))

    inside_row = threading.Event()
    release_row = threading.Event()

    class PausingMemberService(MemberService):
        def resolve_or_create(self, *, name, computing_id):
            # Runs inside the row's transaction, after the store lock is taken.
            inside_row.set()
            release_row.wait(JOIN_TIMEOUT)
            return super().resolve_or_create(name=name, computing_id=computing_id)

    members = PausingMemberService(file_container.db, file_container.members_repo, file_container.attendance_repo)
    importer = BulkImporter(
        file_container.db,
        file_container.events_repo,
        file_container.attendance_repo,
        members,
        file_container.aggregator,
    )
    outcome: dict = {}

    def import_bob():
        outcome["import"] = importer.import_rows(event.event_id, roster(("Bob", "bb2z")))

    def delete():
        outcome["delete"] = file_container.event_service.delete_event(event.event_id)

    importing = threading.Thread(target=import_bob)
    importing.start()
    assert inside_row.wait(JOIN_TIMEOUT)
    deleting = threading.Thread(target=delete)
    deleting.start()
    deleting.join(0.3)
    assert deleting.is_alive()
    release_row.set()
    importing.join(JOIN_TIMEOUT)
    deleting.join(JOIN_TIMEOUT)

    assert outcome["import"].credited == 1
    assert outcome["delete"].to_dict()["reversedPoints"] == 6
    assert outcome["delete"].records_removed == 2
    assert file_container.member_service.get_by_computing_id("bb2z").totals == PointTotals()
    assert_consistent(file_container)
