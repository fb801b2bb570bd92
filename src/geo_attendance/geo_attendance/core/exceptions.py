from __future__ import annotations

from .enums import LocationErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTransition(DomainError):
    """Raised when a lifecycle edge is not legal from the session's current status."""


class SessionNotFound(DomainError):
    """Raised when the referenced attendance session does not exist."""


class SessionNotActive(DomainError):
    """Raised when a submission targets a session that is not accepting attendance."""


class DuplicateSubmission(DomainError):
    """Raised when a claimant already has a record for the session."""


class SweepFailure(DomainError):
    """Raised when the absence sweep could not complete; the close-out should be retried."""


class LocationUnavailable(DomainError):
    """Raised by location providers; carries a normalized error kind."""

    _messages = {
        LocationErrorKind.PERMISSION_DENIED: "Please allow location access to take attendance",
        LocationErrorKind.POSITION_UNAVAILABLE: "Location information is unavailable. Please ensure GPS is enabled",
        LocationErrorKind.TIMEOUT: "Location request timed out. Please try again",
    }

    def __init__(self, kind: LocationErrorKind, message: str | None = None):
        self.kind = LocationErrorKind(kind)
        super().__init__(message or self._messages[self.kind])
