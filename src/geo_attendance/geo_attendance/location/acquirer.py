"""Client-side location acquisition.

Samples a ``LocationProvider`` on a background thread until a fix arrives or
the overall deadline passes. The caller owns the returned handle: it can wait
for the outcome, trigger a manual re-acquisition, or cancel. Acquisition never
submits attendance; the caller confirms and submits separately.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..common.logging import get_logger
from ..core.constants import DEFAULT_ACQUIRE_DEADLINE_S, DEFAULT_LOCATION_TIMEOUT_MS, DEFAULT_RETRY_INTERVAL_S
from ..core.enums import LocationErrorKind
from ..core.exceptions import LocationUnavailable, ValidationError
from ..geometry.model import Coordinate
from .provider import LocationProvider

logger = get_logger(__name__)


@dataclass(frozen=True)
class AcquisitionResult:
    sample: Optional[Coordinate]
    error: Optional[LocationErrorKind]
    attempts: int

    @property
    def ok(self) -> bool:
        return self.sample is not None and self.error is None

    def raise_for_error(self) -> Coordinate:
        """Return the fresh sample or raise the normalized location error."""
        if self.error is not None:
            raise LocationUnavailable(self.error)
        if self.sample is None:
            raise LocationUnavailable(LocationErrorKind.POSITION_UNAVAILABLE)
        return self.sample


UpdateCallback = Callable[[AcquisitionResult], None]


class AcquisitionHandle:
    def __init__(
        self,
        provider: LocationProvider,
        *,
        high_accuracy: bool,
        timeout_ms: int,
        deadline_s: float,
        retry_interval_s: float,
        on_update: Optional[UpdateCallback] = None,
    ):
        self._provider = provider
        self._high_accuracy = high_accuracy
        self._timeout_ms = timeout_ms
        self._deadline_s = deadline_s
        self._retry_interval_s = retry_interval_s
        self._on_update = on_update

        self._lock = threading.RLock()
        self._cancelled = False
        self._sample: Optional[Coordinate] = None
        self._error: Optional[LocationErrorKind] = None
        self._attempts = 0

        self._stop = threading.Event()
        self._finished = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def result(self) -> AcquisitionResult:
        with self._lock:
            return AcquisitionResult(sample=self._sample, error=self._error, attempts=self._attempts)

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def _launch(self) -> bool:
        stop = threading.Event()
        finished = threading.Event()
        with self._lock:
            if self._cancelled:
                return False
            self._stop = stop
            self._finished = finished
            self._error = None
            self._attempts = 0
            self._thread = threading.Thread(
                target=self._run,
                args=(stop, finished),
                name="location-acquirer",
                daemon=True,
            )
            self._thread.start()
        return True

    def _publish(self, stop: threading.Event) -> None:
        callback = self._on_update
        if callback is None:
            return
        # Called under the lock so cancel() cannot return while a callback is in flight.
        with self._lock:
            if stop.is_set() or self._cancelled:
                return
            callback(AcquisitionResult(sample=self._sample, error=self._error, attempts=self._attempts))

    def _run(self, stop: threading.Event, finished: threading.Event) -> None:
        deadline = time.monotonic() + self._deadline_s
        try:
            while not stop.is_set():
                remaining_ms = int((deadline - time.monotonic()) * 1000)
                if remaining_ms <= 0:
                    with self._lock:
                        if not stop.is_set():
                            self._error = LocationErrorKind.TIMEOUT
                    logger.info("location acquisition timed out after %d attempts", self._attempts)
                    self._publish(stop)
                    return

                try:
                    sample = self._provider.request_position(
                        high_accuracy=self._high_accuracy,
                        timeout_ms=min(self._timeout_ms, remaining_ms),
                    )
                except LocationUnavailable as e:
                    kind = e.kind
                    sample = None
                except Exception:
                    logger.exception("location provider failed")
                    kind = LocationErrorKind.POSITION_UNAVAILABLE
                    sample = None
                else:
                    kind = None
                    if not isinstance(sample, Coordinate):
                        logger.warning("location provider returned %r instead of a coordinate", sample)
                        kind = LocationErrorKind.POSITION_UNAVAILABLE
                        sample = None

                with self._lock:
                    if stop.is_set():
                        return
                    self._attempts += 1
                    if sample is not None:
                        self._sample = sample
                        self._error = None
                    else:
                        self._error = kind

                self._publish(stop)

                if sample is not None:
                    logger.info("location acquired after %d attempt(s)", self._attempts)
                    return
                if kind == LocationErrorKind.PERMISSION_DENIED:
                    # Retrying cannot succeed until the user changes the permission.
                    logger.info("location permission denied")
                    return

                stop.wait(self._retry_interval_s)
        finally:
            finished.set()

    def wait(self, timeout: Optional[float] = None) -> AcquisitionResult:
        with self._lock:
            finished = self._finished
        finished.wait(timeout)
        return self.result

    def reacquire(self) -> None:
        """Manual "update location": restart sampling, keeping the last good fix until a new one arrives."""
        with self._lock:
            if self._cancelled:
                raise ValidationError("Acquisition was cancelled")
            self._stop.set()
        self._provider.cancel()
        # A cancel() that ran while the provider was being released wins.
        if not self._launch():
            logger.info("re-acquisition skipped, handle was cancelled")

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._stop.set()
            thread = self._thread
        self._provider.cancel()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self._timeout_ms / 1000.0)
        logger.info("location acquisition cancelled")


class LocationAcquirer:
    def __init__(
        self,
        provider: LocationProvider,
        *,
        high_accuracy: bool = True,
        timeout_ms: int = DEFAULT_LOCATION_TIMEOUT_MS,
        deadline_s: float = DEFAULT_ACQUIRE_DEADLINE_S,
        retry_interval_s: float = DEFAULT_RETRY_INTERVAL_S,
    ):
        if timeout_ms <= 0 or deadline_s <= 0 or retry_interval_s < 0:
            raise ValidationError("Location timeouts must be positive")
        self._provider = provider
        self._high_accuracy = bool(high_accuracy)
        self._timeout_ms = int(timeout_ms)
        self._deadline_s = float(deadline_s)
        self._retry_interval_s = float(retry_interval_s)

    def start(self, on_update: Optional[UpdateCallback] = None) -> AcquisitionHandle:
        handle = AcquisitionHandle(
            self._provider,
            high_accuracy=self._high_accuracy,
            timeout_ms=self._timeout_ms,
            deadline_s=self._deadline_s,
            retry_interval_s=self._retry_interval_s,
            on_update=on_update,
        )
        handle._launch()
        return handle

    def acquire(self) -> AcquisitionResult:
        """Blocking convenience: one full acquisition run."""
        handle = self.start()
        try:
            return handle.wait()
        finally:
            handle.cancel()
