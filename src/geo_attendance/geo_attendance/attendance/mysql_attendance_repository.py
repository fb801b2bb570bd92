from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..geometry.model import Coordinate
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, session_id, claimant_id, timestamp,
    reported_lat, reported_lng, distance_meters, status
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    location = None
    if r.get("reported_lat") is not None and r.get("reported_lng") is not None:
        location = Coordinate(latitude=float(r["reported_lat"]), longitude=float(r["reported_lng"]))
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        session_id=str(r["session_id"]),
        claimant_id=str(r["claimant_id"]),
        timestamp=r["timestamp"],
        reported_location=location,
        distance_meters=float(r["distance_meters"] or 0),
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_record_if_absent(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        loc = record.reported_location
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # UNIQUE(session_id, claimant_id) makes this the atomic duplicate guard.
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        session_id, claimant_id, timestamp, reported_lat, reported_lng, distance_meters, status
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.session_id,
                        record.claimant_id,
                        record.timestamp,
                        loc.latitude if loc else None,
                        loc.longitude if loc else None,
                        record.distance_meters,
                        record.status.value,
                    ),
                )
                record_id = int(cur.lastrowid)
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                return None
            raise

        return AttendanceRecord(
            record_id=record_id,
            session_id=record.session_id,
            claimant_id=record.claimant_id,
            timestamp=record.timestamp,
            reported_location=record.reported_location,
            distance_meters=record.distance_meters,
            status=record.status,
        )

    def get_record(self, session_id: str, claimant_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE session_id=%s AND claimant_id=%s",
                (session_id, claimant_id),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_records(self, session_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE session_id=%s
                ORDER BY timestamp DESC, record_id DESC
                """,
                (session_id,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_claimant_ids(self, session_id: str) -> set[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT claimant_id FROM attendance_records WHERE session_id=%s", (session_id,))
            return {str(r["claimant_id"]) for r in fetchall(cur)}
