from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import SessionStatus
from .model import AttendanceSession


class SessionRepository(Protocol):
    """Persistence contract for attendance sessions.

    The service layer depends on this interface, never on a concrete database.
    """

    def create_session(self, session: AttendanceSession) -> None:
        raise NotImplementedError

    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def list_sessions(self) -> Sequence[AttendanceSession]:
        """All sessions, newest start_time first."""

        raise NotImplementedError

    def find_current(self, *, now: datetime) -> Optional[AttendanceSession]:
        """The active session, else the earliest scheduled one starting at or after ``now``."""

        raise NotImplementedError

    def update_status(self, session_id: str, *, expected: SessionStatus, new: SessionStatus) -> bool:
        """Compare-and-set the status; False when the current status is not ``expected``."""

        raise NotImplementedError

    def delete_session(self, session_id: str) -> bool:
        """Delete the session together with all of its records."""

        raise NotImplementedError
