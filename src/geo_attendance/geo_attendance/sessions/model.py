from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import SessionStatus
from ..geometry.model import Coordinate


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: a geofenced attendance window."""

    session_id: str
    anchor: Coordinate
    radius_meters: float
    start_time: datetime
    end_time: datetime
    status: SessionStatus
    created_by: str
    time_limit_minutes: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.session_id,
            "anchor": self.anchor.to_dict(),
            "radius_meters": self.radius_meters,
            "time_limit_minutes": self.time_limit_minutes,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "status": self.status.value,
            "created_by": self.created_by,
        }
