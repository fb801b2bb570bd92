from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Radius is checked before time: a claimant outside the zone is absent even
    when early, a claimant inside the zone after end_time is late.
    """

    def for_submission(self, *, distance_m: float, radius_m: float, now: datetime, end_time: datetime) -> AttendanceStrategy:
        if distance_m > radius_m:
            return AbsentStrategy()
        if now > end_time:
            return LateStrategy()
        return PresentStrategy()
