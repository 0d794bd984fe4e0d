"""Per-process clock that never goes backwards."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MonotonicClock:
    """UTC wall clock clamped to be non-decreasing within this process.

    Wall time can step backwards (NTP adjustments); entries stamped by one
    process must still sort in append order. Nothing is promised across
    processes.
    """

    def __init__(self, source: Callable[[], datetime] = _utcnow) -> None:
        self._source = source
        self._last: datetime | None = None
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            current = self._source()
            if self._last is not None and current < self._last:
                current = self._last
            self._last = current
            return current
