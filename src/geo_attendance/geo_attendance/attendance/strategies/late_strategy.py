from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Inside the radius, after end_time."""

    def decide(self, *, distance_m: float, radius_m: float, now: datetime, end_time: datetime) -> StatusDecision:
        minutes = int((now - end_time).total_seconds() // 60)
        return StatusDecision(status=AttendanceStatus.LATE, note=f"{minutes} min after window closed")
