from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def insert_record_if_absent(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        """Insert unless (session_id, claimant_id) already has a record.

        Returns the stored record (with its id), or None on duplicate. The check
        and the insert must be atomic against concurrent callers.
        """

        raise NotImplementedError

    def get_record(self, session_id: str, claimant_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_records(self, session_id: str) -> Sequence[AttendanceRecord]:
        """Records of one session, newest timestamp first."""

        raise NotImplementedError

    def list_claimant_ids(self, session_id: str) -> set[str]:
        raise NotImplementedError
