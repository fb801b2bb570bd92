from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Countdown:
    minutes: int
    seconds: int
    percentage: int
    ended: bool

    @property
    def label(self) -> str:
        return f"{self.minutes:02d}:{self.seconds:02d}"

    def to_dict(self) -> dict:
        return {
            "minutes": self.minutes,
            "seconds": self.seconds,
            "percentage": self.percentage,
            "remaining_percentage": 100 - self.percentage,
            "ended": self.ended,
            "label": self.label,
        }


def countdown(now: datetime, start_time: datetime, end_time: datetime) -> Countdown:
    """Time left in the window and how much of it has elapsed (0-100).

    Pure projection of the session timestamps; safe to recompute on any cadence.
    """
    remaining = (end_time - now).total_seconds()
    if remaining <= 0:
        return Countdown(minutes=0, seconds=0, percentage=100, ended=True)

    total = (end_time - start_time).total_seconds()
    whole = int(remaining)
    percentage = 100 - int(remaining / total * 100) if total > 0 else 0
    return Countdown(
        minutes=whole // 60,
        seconds=whole % 60,
        percentage=max(0, min(100, percentage)),
        ended=False,
    )
