from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import CohortRepository


class MySQLCohortRepository(CohortRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_cohort(self) -> set[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT claimant_id FROM cohort_members WHERE status='approved'")
            return {str(r["claimant_id"]) for r in fetchall(cur)}
