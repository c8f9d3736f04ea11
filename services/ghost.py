# services/ghost.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence
import logging
import time

from app.config import GHOST_LENGTH_TOLERANCE
from core.clock import monotonic_ms
from services.typing_engine import Keystroke

log = logging.getLogger(__name__)


@dataclass
class GhostRecord:
    keystrokes: List[Keystroke]
    text_length: int
    wpm: int
    timestamp: float = 0.0  # epoch ms when recorded

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keystrokes": [k.to_dict() for k in self.keystrokes],
            "text_length": self.text_length,
            "wpm": self.wpm,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GhostRecord":
        """Raises KeyError/TypeError/ValueError on malformed data."""
        return cls(
            keystrokes=[Keystroke.from_dict(k) for k in d["keystrokes"]],
            text_length=int(d["text_length"]),
            wpm=int(d["wpm"]),
            timestamp=float(d.get("timestamp", 0.0)),
        )


@dataclass(frozen=True)
class GhostPosition:
    position: int
    percentage: float


@dataclass
class GhostReplay:
    """
    Plays a recorded run back against the wall clock.

    The ghost never sees the player's keys. Each update() walks the cursor
    forward over every recorded keystroke whose timestamp has already passed,
    so the index only ever grows during a playback.
    """

    now_ms: Callable[[], float] = field(default=monotonic_ms)
    record: Optional[GhostRecord] = None
    active: bool = False
    ghost_index: int = 0
    started_at: Optional[float] = None

    def load(self, record: Optional[GhostRecord]) -> bool:
        self.record = record
        return self.record is not None

    def start(self, text_length: int) -> bool:
        if self.record is None or not self.record.keystrokes:
            self.active = False
            return False
        if abs(self.record.text_length - text_length) > GHOST_LENGTH_TOLERANCE:
            log.debug("ghost skipped: recorded for %d chars, text has %d",
                      self.record.text_length, text_length)
            self.active = False
            return False
        self.active = True
        self.ghost_index = 0
        self.started_at = self.now_ms()
        return True

    def stop(self):
        self.active = False
        self.ghost_index = 0
        self.started_at = None

    def reset(self):
        self.ghost_index = 0
        self.started_at = self.now_ms()

    def update(self) -> Optional[GhostPosition]:
        if not self.active or self.record is None:
            return None
        elapsed = self.now_ms() - self.started_at
        keys = self.record.keystrokes
        while self.ghost_index < len(keys) and keys[self.ghost_index].timestamp_ms <= elapsed:
            self.ghost_index += 1
        return GhostPosition(self.ghost_index, self.progress)

    @property
    def position(self) -> int:
        return self.ghost_index

    @property
    def progress(self) -> float:
        if self.record is None or not self.record.keystrokes:
            return 0.0
        return self.ghost_index / len(self.record.keystrokes) * 100

    def should_save(self, wpm: int) -> bool:
        if self.record is None:
            return True
        return wpm > self.record.wpm

    def record_session(self, keystrokes: Sequence[Keystroke], text_length: int,
                       wpm: int) -> GhostRecord:
        return GhostRecord(
            keystrokes=list(keystrokes),
            text_length=text_length,
            wpm=wpm,
            timestamp=time.time() * 1000.0,
        )

    def ghost_stats(self) -> Optional[Dict[str, float]]:
        if self.record is None:
            return None
        return {"wpm": self.record.wpm, "timestamp": self.record.timestamp}

    def is_player_ahead(self, player_position: int) -> bool:
        return player_position > self.ghost_index
