from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Inside the radius, before the window closed."""

    def decide(self, *, distance_m: float, radius_m: float, now: datetime, end_time: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
