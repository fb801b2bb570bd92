from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.locks import SessionLocks
from ..common.logging import get_logger
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus, SessionStatus
from ..core.exceptions import DuplicateSubmission, SessionNotActive, SessionNotFound, ValidationError
from ..geometry.distance import distance
from ..geometry.model import Coordinate
from ..sessions.model import AttendanceSession
from ..sessions.repository import SessionRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, AttendanceSummary, LocationCheck
from .repository import AttendanceRepository

logger = get_logger(__name__)


class AttendanceService:
    """Use case: a claimant submits their location for an active session."""

    def __init__(
        self,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
        *,
        locks: SessionLocks | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._sessions = sessions
        self._attendance = attendance
        self._locks = locks or SessionLocks()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _require_session(self, session_id: str) -> AttendanceSession:
        session = self._sessions.get_session(session_id)
        if not session:
            raise SessionNotFound(f"Session {session_id} not found")
        return session

    def submit(
        self,
        session_id: str,
        claimant_id: str,
        reported_location: Coordinate,
        now: datetime,
    ) -> AttendanceRecord:
        claimant_id = require_non_empty(claimant_id, "Claimant")
        if not isinstance(reported_location, Coordinate):
            raise ValidationError("Reported location must be a coordinate")

        # Held across the status check and the insert so an end() for the same
        # session is ordered strictly before or after this submission.
        with self._locks.hold(session_id):
            session = self._require_session(session_id)
            if session.status != SessionStatus.ACTIVE:
                raise SessionNotActive("Attendance session is not active")

            if self._attendance.get_record(session_id, claimant_id):
                raise DuplicateSubmission("You have already submitted attendance for this session")

            dist = distance(reported_location, session.anchor)
            strategy = self._factory.for_submission(
                distance_m=dist,
                radius_m=session.radius_meters,
                now=now,
                end_time=session.end_time,
            )
            decision = strategy.decide(distance_m=dist, radius_m=session.radius_meters, now=now, end_time=session.end_time)

            stored = self._attendance.insert_record_if_absent(
                AttendanceRecord(
                    record_id=None,
                    session_id=session_id,
                    claimant_id=claimant_id,
                    timestamp=now,
                    reported_location=reported_location,
                    distance_meters=dist,
                    status=decision.status,
                )
            )
            if stored is None:
                # Lost the race against another process; the store's unique key decided.
                raise DuplicateSubmission("You have already submitted attendance for this session")

        logger.info(
            "attendance recorded session=%s claimant=%s status=%s distance=%.1fm%s",
            session_id,
            claimant_id,
            decision.status.value,
            dist,
            f" ({decision.note})" if decision.note else "",
        )
        return stored

    def has_submitted(self, session_id: str, claimant_id: str) -> bool:
        return self._attendance.get_record(session_id, claimant_id) is not None

    def preview(self, session_id: str, reported_location: Coordinate) -> LocationCheck:
        """Distance check shown to the claimant before they confirm; nothing is saved."""
        session = self._require_session(session_id)
        dist = distance(reported_location, session.anchor)
        return LocationCheck(
            distance_meters=dist,
            radius_meters=session.radius_meters,
            within_radius=dist <= session.radius_meters,
        )

    def list_records(self, session_id: str):
        self._require_session(session_id)
        return list(self._attendance.list_records(session_id))

    def summarize(self, session_id: str) -> AttendanceSummary:
        counts = {status: 0 for status in AttendanceStatus}
        for r in self.list_records(session_id):
            counts[r.status] += 1
        return AttendanceSummary(
            session_id=session_id,
            present=counts[AttendanceStatus.PRESENT],
            late=counts[AttendanceStatus.LATE],
            absent=counts[AttendanceStatus.ABSENT],
        )

    def get_history_ui(self, session_id: str, *, search: Optional[str] = None) -> list[dict]:
        rows = self.list_records(session_id)
        if search:
            term = search.strip().lower()
            rows = [r for r in rows if term in r.claimant_id.lower()]
        return [self._to_ui(r) for r in rows]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        label = {
            AttendanceStatus.PRESENT: "Present",
            AttendanceStatus.LATE: "Late",
            AttendanceStatus.ABSENT: "Absent",
        }.get(r.status, r.status.value)

        css = {
            AttendanceStatus.PRESENT: "bg-success",
            AttendanceStatus.LATE: "bg-warning text-dark",
            AttendanceStatus.ABSENT: "bg-danger",
        }.get(r.status, "bg-secondary")

        loc = r.reported_location
        return {
            "claimant_id": r.claimant_id,
            "time": r.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            "location": f"{loc.latitude:.6f}, {loc.longitude:.6f}" if loc else "-",
            "distance": f"{r.distance_meters:.0f} m" if loc else "-",
            "status": label,
            "css_class": css,
        }
