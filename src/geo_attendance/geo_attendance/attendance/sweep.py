from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from ..common.logging import get_logger
from ..core.enums import AttendanceStatus
from ..core.exceptions import SweepFailure
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class SweepResult:
    session_id: str
    inserted: tuple[AttendanceRecord, ...]

    @property
    def count(self) -> int:
        return len(self.inserted)


class AbsenceSweep:
    """Materialize ``absent`` records for cohort members who never submitted.

    Safe to re-run: ``missing`` is re-derived from the stored records on every
    call and each insert goes through the store's duplicate guard.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def sweep(self, session_id: str, enrolled_cohort: Iterable[str], *, now: datetime) -> SweepResult:
        try:
            cohort = {str(c) for c in enrolled_cohort if c is not None and str(c).strip()}
            missing = cohort - self._attendance.list_claimant_ids(session_id)

            inserted: list[AttendanceRecord] = []
            for claimant_id in sorted(missing):
                stored = self._attendance.insert_record_if_absent(
                    AttendanceRecord(
                        record_id=None,
                        session_id=session_id,
                        claimant_id=claimant_id,
                        timestamp=now,
                        reported_location=None,
                        distance_meters=0.0,
                        status=AttendanceStatus.ABSENT,
                    )
                )
                if stored is not None:
                    inserted.append(stored)
        except Exception as e:
            logger.exception("absence sweep failed session=%s", session_id)
            raise SweepFailure(f"Absence sweep failed for session {session_id}: {e}") from e

        logger.info("absence sweep session=%s cohort=%d inserted=%d", session_id, len(cohort), len(inserted))
        return SweepResult(session_id=session_id, inserted=tuple(inserted))
