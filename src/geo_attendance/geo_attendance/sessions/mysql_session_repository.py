from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..geometry.model import Coordinate
from .model import AttendanceSession
from .repository import SessionRepository

_COLUMNS = """
    session_id, anchor_lat, anchor_lng, radius_meters, time_limit_minutes,
    start_time, end_time, status, created_by
"""


def _row_to_session(r: dict) -> AttendanceSession:
    return AttendanceSession(
        session_id=str(r["session_id"]),
        anchor=Coordinate(latitude=float(r["anchor_lat"]), longitude=float(r["anchor_lng"])),
        radius_meters=float(r["radius_meters"]),
        start_time=r["start_time"],
        end_time=r["end_time"],
        status=SessionStatus(r["status"]),
        created_by=str(r["created_by"]),
        time_limit_minutes=int(r.get("time_limit_minutes") or 0),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_session(self, session: AttendanceSession) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sessions(
                    session_id, anchor_lat, anchor_lng, radius_meters, time_limit_minutes,
                    start_time, end_time, status, created_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    session.session_id,
                    session.anchor.latitude,
                    session.anchor.longitude,
                    session.radius_meters,
                    session.time_limit_minutes,
                    session.start_time,
                    session.end_time,
                    session.status.value,
                    session.created_by,
                ),
            )

    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s", (session_id,))
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def list_sessions(self) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions ORDER BY start_time DESC")
            return [_row_to_session(r) for r in fetchall(cur)]

    def find_current(self, *, now: datetime) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE status=%s OR (status=%s AND start_time >= %s)
                ORDER BY (status=%s) DESC, start_time ASC
                LIMIT 1
                """,
                (
                    SessionStatus.ACTIVE.value,
                    SessionStatus.SCHEDULED.value,
                    now,
                    SessionStatus.ACTIVE.value,
                ),
            )
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def update_status(self, session_id: str, *, expected: SessionStatus, new: SessionStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_sessions SET status=%s WHERE session_id=%s AND status=%s",
                (new.value, session_id, expected.value),
            )
            return cur.rowcount > 0

    def delete_session(self, session_id: str) -> bool:
        # Records go first in the same transaction; the FK cascade covers any stragglers.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE session_id=%s", (session_id,))
            cur.execute("DELETE FROM attendance_sessions WHERE session_id=%s", (session_id,))
            return cur.rowcount > 0
