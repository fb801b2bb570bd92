from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.sweep import AbsenceSweep
from .cohort.mysql_cohort_repository import MySQLCohortRepository
from .cohort.repository import CohortRepository
from .common.locks import SessionLocks
from .database.connection import DBConfig, DatabaseConnection
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService


@dataclass(frozen=True)
class Container:
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository
    cohort_repo: CohortRepository

    session_service: SessionService
    attendance_service: AttendanceService


def wire(
    *,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    cohort_repo: CohortRepository,
) -> Container:
    """Build services over any repository implementations sharing one lock registry."""
    locks = SessionLocks()
    sweep = AbsenceSweep(attendance_repo)

    session_service = SessionService(sessions_repo, sweep, cohort_repo, locks=locks)
    attendance_service = AttendanceService(
        sessions_repo,
        attendance_repo,
        locks=locks,
        strategy_factory=AttendanceStrategyFactory(),
    )

    return Container(
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        cohort_repo=cohort_repo,
        session_service=session_service,
        attendance_service=attendance_service,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        sessions_repo=MySQLSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        cohort_repo=MySQLCohortRepository(conn),
    )
