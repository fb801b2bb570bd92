from __future__ import annotations

import math
import threading
from datetime import timedelta

import pytest

from src.geo_attendance.geo_attendance.core.constants import EARTH_RADIUS_M
from src.geo_attendance.geo_attendance.core.enums import AttendanceStatus
from src.geo_attendance.geo_attendance.core.exceptions import (
    DuplicateSubmission,
    SessionNotActive,
    SessionNotFound,
    ValidationError,
)
from src.geo_attendance.geo_attendance.geometry.model import Coordinate

ANCHOR = Coordinate(14.0, 121.0)


def at_distance(meters: float) -> Coordinate:
    return Coordinate(ANCHOR.latitude + math.degrees(meters / EARTH_RADIUS_M), ANCHOR.longitude)


def active_session(store, now, *, radius=50.0):
    session = store.session_service.create_session(
        operator_id="officer-1",
        anchor=ANCHOR,
        radius_meters=radius,
        start_time=now - timedelta(minutes=10),
        end_time=now + timedelta(minutes=20),
    )
    store.session_service.start(session.session_id)
    return session


def test_inside_radius_before_end_is_present(store, fixed_now):
    s = active_session(store, fixed_now)

    rec = store.attendance_service.submit(s.session_id, "A", at_distance(10), fixed_now)

    assert rec.status == AttendanceStatus.PRESENT
    assert rec.distance_meters == pytest.approx(10, abs=1e-6)
    assert rec.reported_location == at_distance(10)
    assert rec.timestamp == fixed_now
    assert rec.record_id is not None


def test_inside_radius_after_end_is_late(store, fixed_now):
    s = active_session(store, fixed_now)

    rec = store.attendance_service.submit(s.session_id, "A", at_distance(10), s.end_time + timedelta(minutes=1))

    assert rec.status == AttendanceStatus.LATE


def test_outside_radius_is_absent_even_when_early(store, fixed_now):
    s = active_session(store, fixed_now)

    rec = store.attendance_service.submit(s.session_id, "A", at_distance(200), fixed_now)

    assert rec.status == AttendanceStatus.ABSENT
    assert rec.distance_meters == pytest.approx(200, abs=1e-6)


def test_submit_against_scheduled_session_is_rejected(store, fixed_now):
    s = store.session_service.create_session(
        operator_id="officer-1",
        anchor=ANCHOR,
        radius_meters=50,
        start_time=fixed_now,
        time_limit_minutes=30,
    )

    with pytest.raises(SessionNotActive):
        store.attendance_service.submit(s.session_id, "A", at_distance(10), fixed_now)
    assert store.attendance_repo.list_records(s.session_id) == []


def test_submit_against_completed_session_is_rejected(store, fixed_now):
    s = active_session(store, fixed_now)
    store.session_service.end(s.session_id, cohort=[], now=fixed_now)

    with pytest.raises(SessionNotActive):
        store.attendance_service.submit(s.session_id, "A", at_distance(10), fixed_now)


def test_submit_unknown_session(store, fixed_now):
    with pytest.raises(SessionNotFound):
        store.attendance_service.submit("missing", "A", at_distance(10), fixed_now)


def test_second_submission_is_duplicate_and_count_unchanged(store, fixed_now):
    s = active_session(store, fixed_now)
    first = store.attendance_service.submit(s.session_id, "A", at_distance(10), fixed_now)

    with pytest.raises(DuplicateSubmission):
        store.attendance_service.submit(s.session_id, "A", at_distance(300), fixed_now + timedelta(seconds=5))

    records = store.attendance_repo.list_records(s.session_id)
    assert records == [first]


def test_has_submitted(store, fixed_now):
    s = active_session(store, fixed_now)
    assert store.attendance_service.has_submitted(s.session_id, "A") is False

    store.attendance_service.submit(s.session_id, "A", at_distance(10), fixed_now)

    assert store.attendance_service.has_submitted(s.session_id, "A") is True
    assert store.attendance_service.has_submitted(s.session_id, "B") is False


def test_classification_is_deterministic(store, fixed_now):
    statuses = set()
    for i in range(5):
        s = active_session(store, fixed_now)
        statuses.add(store.attendance_service.submit(s.session_id, f"claimant-{i}", at_distance(42), fixed_now).status)

    assert statuses == {AttendanceStatus.PRESENT}


def test_blank_claimant_is_rejected(store, fixed_now):
    s = active_session(store, fixed_now)

    with pytest.raises(ValidationError):
        store.attendance_service.submit(s.session_id, "  ", at_distance(10), fixed_now)


def test_concurrent_submissions_yield_exactly_one_record(store, fixed_now):
    s = active_session(store, fixed_now)
    workers = 16
    barrier = threading.Barrier(workers)
    outcomes: list[str] = []
    outcomes_lock = threading.Lock()

    def attempt():
        barrier.wait()
        try:
            store.attendance_service.submit(s.session_id, "A", at_distance(10), fixed_now)
            result = "ok"
        except DuplicateSubmission:
            result = "duplicate"
        with outcomes_lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("duplicate") == workers - 1
    assert len(store.attendance_repo.list_records(s.session_id)) == 1


def test_submit_racing_end_is_never_lost_or_double_counted(store, fixed_now):
    s = active_session(store, fixed_now)
    claimants = [f"c{i}" for i in range(20)]
    barrier = threading.Barrier(len(claimants) + 1)
    accepted: set[str] = set()
    rejected: set[str] = set()
    lock = threading.Lock()

    def submit(claimant_id):
        barrier.wait()
        try:
            store.attendance_service.submit(s.session_id, claimant_id, at_distance(5), fixed_now)
            with lock:
                accepted.add(claimant_id)
        except SessionNotActive:
            with lock:
                rejected.add(claimant_id)

    def end():
        barrier.wait()
        store.session_service.end(s.session_id, cohort=claimants, now=fixed_now)

    threads = [threading.Thread(target=submit, args=(c,)) for c in claimants]
    threads.append(threading.Thread(target=end))
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    records = {r.claimant_id: r for r in store.attendance_repo.list_records(s.session_id)}
    assert accepted | rejected == set(claimants)
    assert set(records) == set(claimants)
    for c in accepted:
        assert records[c].status == AttendanceStatus.PRESENT
    for c in rejected:
        assert records[c].status == AttendanceStatus.ABSENT
        assert records[c].reported_location is None


def test_preview_does_not_persist(store, fixed_now):
    s = active_session(store, fixed_now)

    check = store.attendance_service.preview(s.session_id, at_distance(80))

    assert check.within_radius is False
    assert check.distance_meters == pytest.approx(80, abs=1e-6)
    assert store.attendance_service.has_submitted(s.session_id, "A") is False


def test_summary_and_history_rows(store, fixed_now):
    s = active_session(store, fixed_now)
    svc = store.attendance_service
    svc.submit(s.session_id, "A", at_distance(10), fixed_now)
    svc.submit(s.session_id, "B", at_distance(10), s.end_time + timedelta(minutes=2))
    store.session_service.end(s.session_id, cohort={"A", "B", "C"}, now=s.end_time + timedelta(minutes=3))

    summary = svc.summarize(s.session_id)
    assert (summary.present, summary.late, summary.absent, summary.total) == (1, 1, 1, 3)

    rows = svc.get_history_ui(s.session_id)
    assert [r["claimant_id"] for r in rows] == ["C", "B", "A"]
    assert rows[0]["location"] == "-"
    assert rows[0]["status"] == "Absent"
    assert rows[2]["distance"] == "10 m"

    assert [r["claimant_id"] for r in svc.get_history_ui(s.session_id, search="b")] == ["B"]


def test_padded_claimant_id_is_kept_verbatim_through_end(store, fixed_now):
    s = active_session(store, fixed_now)

    rec = store.attendance_service.submit(s.session_id, " A ", at_distance(10), fixed_now)
    assert rec.claimant_id == " A "
    assert store.attendance_service.has_submitted(s.session_id, " A ")
    assert not store.attendance_service.has_submitted(s.session_id, "A")

    result = store.session_service.end(s.session_id, cohort={" A ", "B"}, now=fixed_now)

    assert [r.claimant_id for r in result.inserted] == ["B"]
    records = store.attendance_service.list_records(s.session_id)
    assert sorted((r.claimant_id, r.status) for r in records) == [
        (" A ", AttendanceStatus.PRESENT),
        ("B", AttendanceStatus.ABSENT),
    ]
