from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """Outside the radius, regardless of time."""

    def decide(self, *, distance_m: float, radius_m: float, now: datetime, end_time: datetime) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.ABSENT,
            note=f"{distance_m:.0f} m from anchor (allowed {radius_m:.0f} m)",
        )
