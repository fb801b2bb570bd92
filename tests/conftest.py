from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional

import pytest

from src.geo_attendance.geo_attendance.attendance.model import AttendanceRecord
from src.geo_attendance.geo_attendance.container import wire
from src.geo_attendance.geo_attendance.core.enums import SessionStatus
from src.geo_attendance.geo_attendance.sessions.model import AttendanceSession


class InMemorySessions:
    def __init__(self):
        self._by_id: dict[str, AttendanceSession] = {}
        self._lock = threading.Lock()

    def create_session(self, session: AttendanceSession) -> None:
        self._by_id[session.session_id] = session

    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        return self._by_id.get(session_id)

    def list_sessions(self):
        return sorted(self._by_id.values(), key=lambda s: s.start_time, reverse=True)

    def find_current(self, *, now: datetime) -> Optional[AttendanceSession]:
        active = [s for s in self._by_id.values() if s.status == SessionStatus.ACTIVE]
        upcoming = [s for s in self._by_id.values() if s.status == SessionStatus.SCHEDULED and s.start_time >= now]
        candidates = sorted(active, key=lambda s: s.start_time) or sorted(upcoming, key=lambda s: s.start_time)
        return candidates[0] if candidates else None

    def update_status(self, session_id: str, *, expected: SessionStatus, new: SessionStatus) -> bool:
        with self._lock:
            s = self._by_id.get(session_id)
            if not s or s.status != expected:
                return False
            self._by_id[session_id] = AttendanceSession(
                session_id=s.session_id,
                anchor=s.anchor,
                radius_meters=s.radius_meters,
                start_time=s.start_time,
                end_time=s.end_time,
                status=new,
                created_by=s.created_by,
                time_limit_minutes=s.time_limit_minutes,
            )
            return True

    def delete_session(self, session_id: str) -> bool:
        return self._by_id.pop(session_id, None) is not None


class InMemoryAttendance:
    def __init__(self, sessions: InMemorySessions):
        self._sessions = sessions
        self._records: dict[tuple[str, str], AttendanceRecord] = {}
        self._id = 0
        self._lock = threading.Lock()
        self.fail_inserts_after: Optional[int] = None

    def insert_record_if_absent(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        with self._lock:
            if self.fail_inserts_after is not None:
                if self.fail_inserts_after <= 0:
                    raise ConnectionError("database went away")
                self.fail_inserts_after -= 1
            key = (record.session_id, record.claimant_id)
            if key in self._records:
                return None
            self._id += 1
            stored = AttendanceRecord(
                record_id=self._id,
                session_id=record.session_id,
                claimant_id=record.claimant_id,
                timestamp=record.timestamp,
                reported_location=record.reported_location,
                distance_meters=record.distance_meters,
                status=record.status,
            )
            self._records[key] = stored
            return stored

    def get_record(self, session_id: str, claimant_id: str) -> Optional[AttendanceRecord]:
        return self._records.get((session_id, claimant_id))

    def list_records(self, session_id: str):
        items = [r for (sid, _), r in self._records.items() if sid == session_id]
        items.sort(key=lambda r: (r.timestamp, r.record_id), reverse=True)
        return items

    def list_claimant_ids(self, session_id: str) -> set[str]:
        return {cid for (sid, cid) in self._records if sid == session_id}

    def delete_for_session(self, session_id: str) -> None:
        for key in [k for k in self._records if k[0] == session_id]:
            del self._records[key]


class CascadingSessions(InMemorySessions):
    """Deleting a session also drops its records, like the FK cascade."""

    attendance: Optional[InMemoryAttendance] = None

    def delete_session(self, session_id: str) -> bool:
        if self.attendance is not None:
            self.attendance.delete_for_session(session_id)
        return super().delete_session(session_id)


class InMemoryCohort:
    def __init__(self, members=()):
        self.members = set(members)

    def list_cohort(self) -> set[str]:
        return set(self.members)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 18, 40, 0)


@pytest.fixture
def store():
    sessions = CascadingSessions()
    attendance = InMemoryAttendance(sessions)
    sessions.attendance = attendance
    cohort = InMemoryCohort({"A", "B", "C"})
    container = wire(sessions_repo=sessions, attendance_repo=attendance, cohort_repo=cohort)
    return container
