import json
import logging
import os
import sqlite3
import time
from typing import Any, List, Optional

from app.config import (
    ACCURACY_HISTORY_LIMIT,
    DB_PATH,
    GHOST_MAX_KEYSTROKES,
    MAX_TREE_LEVEL,
    Settings,
)
from app.errors import StorageError
from services.ghost import GhostRecord

log = logging.getLogger(__name__)

KEYS = {
    "best_wpm": "best_wpm",
    "accuracy_history": "accuracy_history",
    "unlocked_animals": "unlocked_animals",
    "ghost": "ghost_data",
    "settings": "settings",
    "bananas": "bananas",
    "sessions": "sessions_completed",
    "eggs": "mystery_eggs",
    "daily": "daily_challenge",
    "tree": "tree_level",
}


def _ensure_schema(conn):
    conn.execute("""
    CREATE TABLE IF NOT EXISTS kv(
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)


class Storage:
    """
    Local progress store: one SQLite table of JSON blobs keyed by name.

    Every public method swallows storage trouble: reads fall back to their
    default, writes report False. Callers never see a database exception.
    """

    def __init__(self, path: str = DB_PATH):
        self.path = path

    # -------- low level --------
    def _connect(self) -> sqlite3.Connection:
        try:
            folder = os.path.dirname(self.path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            conn = sqlite3.connect(self.path)
            _ensure_schema(conn)
            return conn
        except (sqlite3.Error, OSError) as e:
            raise StorageError(str(e)) from e

    def _read(self, key: str) -> Optional[str]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
            return row[0] if row else None
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def _write(self, key: str, raw: str):
        conn = self._connect()
        try:
            conn.execute(
                "INSERT INTO kv(key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=CURRENT_TIMESTAMP",
                (key, raw),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def get(self, key: str, default: Any = None) -> Any:
        try:
            raw = self._read(key)
            return default if raw is None else json.loads(raw)
        except (StorageError, ValueError) as e:
            log.warning("Could not read %s: %s", key, e)
            return default

    def set(self, key: str, value: Any) -> bool:
        try:
            self._write(key, json.dumps(value))
            return True
        except (StorageError, TypeError, ValueError) as e:
            log.warning("Could not write %s: %s", key, e)
            return False

    def clear_all(self) -> bool:
        try:
            conn = self._connect()
        except StorageError as e:
            log.warning("Could not clear progress: %s", e)
            return False
        try:
            conn.execute("DELETE FROM kv")
            conn.commit()
            return True
        except sqlite3.Error as e:
            log.warning("Could not clear progress: %s", e)
            return False
        finally:
            conn.close()

    # -------- best wpm --------
    def load_best_wpm(self) -> int:
        value = self.get(KEYS["best_wpm"], 0)
        return value if isinstance(value, int) else 0

    def save_best_wpm(self, wpm: int) -> bool:
        """Returns True when wpm is a new personal best."""
        if wpm > self.load_best_wpm():
            self.set(KEYS["best_wpm"], wpm)
            return True
        return False

    # -------- ghost --------
    def load_ghost_record(self) -> Optional[GhostRecord]:
        data = self.get(KEYS["ghost"])
        if data is None:
            return None
        try:
            return GhostRecord.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            log.warning("Discarding unreadable ghost record: %s", e)
            return None

    def save_ghost_record(self, record: GhostRecord) -> bool:
        data = record.to_dict()
        data["keystrokes"] = data["keystrokes"][:GHOST_MAX_KEYSTROKES]
        return self.set(KEYS["ghost"], data)

    # -------- accuracy history --------
    def accuracy_history(self) -> List[dict]:
        value = self.get(KEYS["accuracy_history"], [])
        return value if isinstance(value, list) else []

    def save_accuracy(self, accuracy: int) -> bool:
        history = self.accuracy_history()
        history.append({"accuracy": accuracy, "timestamp": time.time() * 1000.0})
        return self.set(KEYS["accuracy_history"], history[-ACCURACY_HISTORY_LIMIT:])

    # -------- animals --------
    def unlocked_animals(self) -> List[str]:
        value = self.get(KEYS["unlocked_animals"], ["snail"])
        return list(value) if isinstance(value, list) else ["snail"]

    def unlock_animal(self, animal_id: str) -> bool:
        """Returns True when the animal was locked before."""
        unlocked = self.unlocked_animals()
        was_locked = animal_id not in unlocked
        if was_locked:
            unlocked.append(animal_id)
        self.set(KEYS["unlocked_animals"], unlocked)
        return was_locked

    def is_animal_unlocked(self, animal_id: str) -> bool:
        return animal_id in self.unlocked_animals()

    # -------- settings --------
    def load_settings(self) -> Settings:
        return Settings.from_dict(self.get(KEYS["settings"]))

    def save_settings(self, settings: Settings) -> bool:
        return self.set(KEYS["settings"], settings.to_dict())

    # -------- bananas / sessions --------
    def bananas(self) -> int:
        value = self.get(KEYS["bananas"], 0)
        return value if isinstance(value, int) else 0

    def add_bananas(self, amount: int) -> int:
        total = self.bananas() + amount
        self.set(KEYS["bananas"], total)
        return total

    def sessions_completed(self) -> int:
        value = self.get(KEYS["sessions"], 0)
        return value if isinstance(value, int) else 0

    def increment_sessions(self) -> int:
        count = self.sessions_completed() + 1
        self.set(KEYS["sessions"], count)
        return count

    # -------- mystery eggs --------
    def mystery_eggs(self) -> List[dict]:
        value = self.get(KEYS["eggs"], [])
        if not isinstance(value, list):
            return []
        return [egg for egg in value if isinstance(egg, dict)]

    def add_mystery_egg(self) -> str:
        eggs = self.mystery_eggs()
        egg_id = f"egg_{int(time.time() * 1000)}_{len(eggs)}"
        eggs.append({"id": egg_id, "hatched": False})
        self.set(KEYS["eggs"], eggs)
        return egg_id

    def hatch_egg(self, egg_id: str, animal_id: str) -> Optional[str]:
        eggs = self.mystery_eggs()
        for egg in eggs:
            if egg.get("id") == egg_id and not egg.get("hatched"):
                egg["hatched"] = True
                egg["animal"] = animal_id
                self.set(KEYS["eggs"], eggs)
                return animal_id
        return None

    # -------- daily challenge --------
    def daily_challenge_done(self, today: str) -> bool:
        state = self.get(KEYS["daily"], {})
        if not isinstance(state, dict) or state.get("last_date") != today:
            self.set(KEYS["daily"], {"last_date": today, "completed": False})
            return False
        return bool(state.get("completed"))

    def complete_daily_challenge(self, today: str) -> bool:
        return self.set(KEYS["daily"], {"last_date": today, "completed": True})

    # -------- typing tree --------
    def tree_level(self) -> int:
        value = self.get(KEYS["tree"], 1)
        return value if isinstance(value, int) else 1

    def grow_tree(self) -> int:
        level = min(self.tree_level() + 1, MAX_TREE_LEVEL)
        self.set(KEYS["tree"], level)
        return level
