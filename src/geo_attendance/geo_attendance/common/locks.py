from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class SessionLocks:
    """Per-session re-entrant locks shared by lifecycle and submission services.

    Serializes, within one process, everything that reads a session's status and
    then writes records or status for it (submit, end, delete).
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def _lock_for(self, session_id: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(session_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[session_id] = lock
            return lock

    @contextmanager
    def hold(self, session_id: str) -> Iterator[None]:
        lock = self._lock_for(session_id)
        with lock:
            yield

    def discard(self, session_id: str) -> None:
        with self._guard:
            self._locks.pop(session_id, None)
