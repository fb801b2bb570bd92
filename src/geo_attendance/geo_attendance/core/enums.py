from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle of an attendance session: scheduled -> active -> completed."""

    SCHEDULED = "scheduled"
    ACTIVE = "active"
    COMPLETED = "completed"


class AttendanceStatus(str, Enum):
    """Classification stored on every attendance record."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class LocationErrorKind(str, Enum):
    """Normalized failure reasons reported by a device location provider."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
