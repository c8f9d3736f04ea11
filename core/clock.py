# core/clock.py
from __future__ import annotations
import time
from typing import Callable, Optional


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class SessionClock:
    """
    The one clock of a typing session.

    It starts lazily on the first accepted keystroke, so time spent looking at
    the text before typing never counts. Both the typing engine and the stats
    calculator read it; start() is idempotent.
    """

    def __init__(self, now_ms: Optional[Callable[[], float]] = None):
        self._now = now_ms or monotonic_ms
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    @property
    def started(self) -> bool:
        return self._started_at is not None

    @property
    def stopped(self) -> bool:
        return self._stopped_at is not None

    def start(self) -> bool:
        if self._started_at is not None:
            return False
        self._started_at = self._now()
        self._stopped_at = None
        return True

    def stop(self):
        if self._started_at is not None and self._stopped_at is None:
            self._stopped_at = self._now()

    def reset(self):
        self._started_at = None
        self._stopped_at = None

    def elapsed_ms(self) -> float:
        if self._started_at is None:
            return 0.0
        end = self._stopped_at if self._stopped_at is not None else self._now()
        return max(0.0, end - self._started_at)
