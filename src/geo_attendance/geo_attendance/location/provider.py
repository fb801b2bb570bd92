from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import LocationErrorKind
from ..core.exceptions import LocationUnavailable
from ..geometry.model import Coordinate


class LocationProvider(Protocol):
    """Device/platform geolocation.

    ``request_position`` blocks for at most ``timeout_ms`` and either returns a
    fix or raises ``LocationUnavailable``. ``cancel`` aborts a pending request
    and releases whatever the platform holds for it.
    """

    def request_position(self, *, high_accuracy: bool, timeout_ms: int) -> Coordinate:
        raise NotImplementedError

    def cancel(self) -> None:
        raise NotImplementedError


class StaticLocationProvider(LocationProvider):
    """Always answers with the same fix (or the same error); used by the CLI and tests."""

    def __init__(self, coordinate: Optional[Coordinate] = None, *, error: Optional[LocationErrorKind] = None):
        if coordinate is None and error is None:
            error = LocationErrorKind.POSITION_UNAVAILABLE
        self._coordinate = coordinate
        self._error = error
        self.requests = 0
        self.cancelled = 0

    def request_position(self, *, high_accuracy: bool, timeout_ms: int) -> Coordinate:
        self.requests += 1
        if self._error is not None:
            raise LocationUnavailable(self._error)
        return self._coordinate

    def cancel(self) -> None:
        self.cancelled += 1
