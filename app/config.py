# app/config.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict
import os

# Session timing
TICK_INTERVAL_MS = 100

# Ghost replay
GHOST_MAX_KEYSTROKES = 1000
GHOST_LENGTH_TOLERANCE = 20

# Progress bookkeeping
ACCURACY_HISTORY_LIMIT = 50
MAX_TREE_LEVEL = 5
EGG_EVERY_N_SESSIONS = 5
TREE_EVERY_N_SESSIONS = 3
COMBO_EVERY_N_STREAK = 10

# Files
DB_PATH = os.environ.get("JUNGLE_TYPING_DB", "data/jungle.db")
LOG_FILE = "app.log"

DIFFICULTIES = ("easy", "medium", "hard")
FONT_SIZES = ("small", "medium", "large")


@dataclass
class Settings:
    sound_enabled: bool = True
    music_enabled: bool = True
    night_mode: bool = False
    difficulty: str = "medium"
    font_size: str = "medium"

    @classmethod
    def from_dict(cls, d: Dict[str, Any] | None) -> "Settings":
        """Build settings from a stored blob, falling back to defaults per key."""
        s = cls()
        if not isinstance(d, dict):
            return s
        for name in ("sound_enabled", "music_enabled", "night_mode"):
            if isinstance(d.get(name), bool):
                setattr(s, name, d[name])
        if d.get("difficulty") in DIFFICULTIES:
            s.difficulty = d["difficulty"]
        if d.get("font_size") in FONT_SIZES:
            s.font_size = d["font_size"]
        return s

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
