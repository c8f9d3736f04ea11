# core/chrono.py
from __future__ import annotations
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from app.config import TICK_INTERVAL_MS


class SessionTicker(QObject):
    """Fixed-cadence poll that drives live stats and the ghost."""

    ticked = Signal()

    def __init__(self, callback: Optional[Callable[[], object]] = None,
                 interval_ms: int = TICK_INTERVAL_MS, parent=None):
        super().__init__(parent)
        self._tick = QTimer(self)
        self._tick.setInterval(interval_ms)
        self._tick.timeout.connect(self._on_tick)
        if callback is not None:
            self.ticked.connect(callback)

    @property
    def active(self) -> bool:
        return self._tick.isActive()

    def start(self):
        self._tick.start()

    def stop(self):
        if self._tick.isActive():
            self._tick.stop()

    def _on_tick(self):
        self.ticked.emit()
