from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..geometry.model import Coordinate


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one claimant's classified attendance for one session.

    ``record_id`` is None until the store assigns one.
    """

    record_id: Optional[int]
    session_id: str
    claimant_id: str
    timestamp: datetime
    reported_location: Optional[Coordinate]
    distance_meters: float
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "session_id": self.session_id,
            "claimant_id": self.claimant_id,
            "timestamp": self.timestamp.isoformat(),
            "reported_location": self.reported_location.to_dict() if self.reported_location else None,
            "distance_meters": round(self.distance_meters, 2),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model: per-status counts for a session."""

    session_id: str
    present: int
    late: int
    absent: int

    @property
    def total(self) -> int:
        return self.present + self.late + self.absent

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "total": self.total,
        }


@dataclass(frozen=True)
class LocationCheck:
    """Unsaved preview of how far a reported point is from the anchor."""

    distance_meters: float
    radius_meters: float
    within_radius: bool

    def to_dict(self) -> dict:
        return {
            "distance_meters": round(self.distance_meters, 2),
            "radius_meters": self.radius_meters,
            "within_radius": self.within_radius,
        }
