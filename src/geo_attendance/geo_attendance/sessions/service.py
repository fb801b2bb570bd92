from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.sweep import AbsenceSweep, SweepResult
from ..cohort.repository import CohortRepository
from ..common.datetime_utils import now_local
from ..common.locks import SessionLocks
from ..common.logging import get_logger
from ..common.validators import require_non_empty, require_positive
from ..core.enums import SessionStatus
from ..core.exceptions import InvalidTransition, SessionNotFound, SweepFailure, ValidationError
from ..geometry.model import Coordinate
from .model import AttendanceSession
from .repository import SessionRepository

logger = get_logger(__name__)


class SessionService:
    """Use case: operators create, start, end and delete attendance sessions.

    State machine: scheduled --start--> active --end--> completed. Ending a
    session runs the absence sweep before the status flips, so a failed sweep
    leaves the session active and the whole close-out can be retried.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        sweep: AbsenceSweep,
        cohort: CohortRepository | None = None,
        *,
        locks: SessionLocks | None = None,
    ):
        self._sessions = sessions
        self._sweep = sweep
        self._cohort = cohort
        self._locks = locks or SessionLocks()

    def _require_session(self, session_id: str) -> AttendanceSession:
        session = self._sessions.get_session(session_id)
        if not session:
            raise SessionNotFound(f"Session {session_id} not found")
        return session

    def create_session(
        self,
        *,
        operator_id: str,
        anchor: Coordinate,
        radius_meters: float,
        start_time: datetime,
        end_time: Optional[datetime] = None,
        time_limit_minutes: Optional[int] = None,
    ) -> AttendanceSession:
        operator_id = require_non_empty(operator_id, "Operator")
        if not isinstance(anchor, Coordinate):
            raise ValidationError("Anchor must be a coordinate")
        radius = require_positive(radius_meters, "Radius")

        if (end_time is None) == (time_limit_minutes is None):
            raise ValidationError("Provide either an end time or a time limit")
        if time_limit_minutes is not None:
            limit = require_positive(time_limit_minutes, "Time limit")
            end_time = start_time + timedelta(minutes=limit)
        if end_time <= start_time:
            raise ValidationError("End time must be after start time")

        session = AttendanceSession(
            session_id=uuid.uuid4().hex,
            anchor=anchor,
            radius_meters=radius,
            start_time=start_time,
            end_time=end_time,
            status=SessionStatus.SCHEDULED,
            created_by=operator_id,
            time_limit_minutes=int((end_time - start_time).total_seconds() // 60),
        )
        self._sessions.create_session(session)
        logger.info(
            "session created id=%s by=%s radius=%.0fm window=%s..%s",
            session.session_id,
            operator_id,
            radius,
            start_time.isoformat(),
            end_time.isoformat(),
        )
        return session

    def get_session(self, session_id: str) -> AttendanceSession:
        return self._require_session(session_id)

    def list_sessions(self) -> Sequence[AttendanceSession]:
        return list(self._sessions.list_sessions())

    def get_current_session(self, *, now: Optional[datetime] = None) -> Optional[AttendanceSession]:
        return self._sessions.find_current(now=now or now_local())

    def _transition(self, session: AttendanceSession, new: SessionStatus) -> None:
        if not self._sessions.update_status(session.session_id, expected=session.status, new=new):
            current = self._require_session(session.session_id)
            raise InvalidTransition(
                f"Session {session.session_id} changed to {current.status.value} concurrently"
            )
        logger.info("session %s: %s -> %s", session.session_id, session.status.value, new.value)

    def start(self, session_id: str) -> AttendanceSession:
        with self._locks.hold(session_id):
            session = self._require_session(session_id)
            if session.status != SessionStatus.SCHEDULED:
                raise InvalidTransition(f"Cannot start a {session.status.value} session")
            self._transition(session, SessionStatus.ACTIVE)
        return self._require_session(session_id)

    def end(
        self,
        session_id: str,
        *,
        cohort: Optional[Iterable[str]] = None,
        now: Optional[datetime] = None,
    ) -> SweepResult:
        """End an active session and mark every non-submitting cohort member absent."""
        with self._locks.hold(session_id):
            session = self._require_session(session_id)
            if session.status != SessionStatus.ACTIVE:
                raise InvalidTransition(f"Cannot end a {session.status.value} session")

            if cohort is None:
                if self._cohort is None:
                    raise SweepFailure("No cohort available for the absence sweep")
                try:
                    cohort = self._cohort.list_cohort()
                except Exception as e:
                    raise SweepFailure(f"Could not load cohort: {e}") from e

            result = self._sweep.sweep(session_id, cohort, now=now or now_local())
            self._transition(session, SessionStatus.COMPLETED)
        # Completed sessions take no more writes that need ordering.
        self._locks.discard(session_id)
        return result

    def delete(self, session_id: str) -> None:
        with self._locks.hold(session_id):
            session = self._require_session(session_id)
            if session.status == SessionStatus.ACTIVE:
                raise InvalidTransition("End the session before deleting it")
            if not self._sessions.delete_session(session_id):
                raise SessionNotFound(f"Session {session_id} not found")
        self._locks.discard(session_id)
        logger.info("session deleted id=%s", session_id)
