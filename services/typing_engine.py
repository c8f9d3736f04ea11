# services/typing_engine.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from core.clock import SessionClock
from services.stats import Backspace, CorrectChar, IncorrectChar, StatEvent

BACKSPACE_KEY = "Backspace"
SPACE_KEY = "Space"


class EngineState(Enum):
    IDLE = "idle"
    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED = "stopped"


@dataclass(frozen=True)
class Keystroke:
    timestamp_ms: float
    char: str
    correct: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Keystroke":
        return cls(float(d["timestamp_ms"]), str(d["char"]), bool(d["correct"]))


@dataclass(frozen=True)
class KeyResult:
    action: str  # "correct" | "incorrect" | "backspace"
    correct: bool
    char: Optional[str]
    expected: Optional[str]
    index: int
    completed: bool = False


class TypingEngine:
    """
    Matches keys against the target text one character at a time.

    The cursor only moves forward on a correct key and only moves back on
    backspace. Every character key (right or wrong) lands in the keystroke log
    with its time since the first keystroke; that log is what a ghost replays.
    Counting is left to whoever listens on ``on_event``.
    """

    def __init__(self, clock: Optional[SessionClock] = None,
                 on_event: Optional[Callable[[StatEvent], None]] = None):
        self.clock = clock or SessionClock()
        self.on_event = on_event
        self.on_correct: Optional[Callable[[int], None]] = None
        self.on_incorrect: Optional[Callable[[], None]] = None
        self.on_complete: Optional[Callable[[], None]] = None
        self.streak = 0
        self.load("")

    # -------- lifecycle --------
    def load(self, text: str):
        self.target = text or ""
        self.state = EngineState.READY if self.target else EngineState.IDLE
        self.reset()

    def reset(self):
        self.cursor = 0
        self.streak = 0
        self._log: List[Keystroke] = []
        self.clock.reset()
        if self.state is not EngineState.IDLE:
            self.state = EngineState.READY

    def start(self) -> bool:
        if self.state is not EngineState.READY:
            return False
        self.state = EngineState.RUNNING
        return True

    def stop(self):
        if self.state is EngineState.RUNNING:
            self.state = EngineState.STOPPED

    def set_callbacks(self, on_correct=None, on_incorrect=None, on_complete=None):
        self.on_correct = on_correct
        self.on_incorrect = on_incorrect
        self.on_complete = on_complete

    # -------- input --------
    def process_key(self, key: str) -> Optional[KeyResult]:
        if self.state is not EngineState.RUNNING or not key:
            return None

        if key == BACKSPACE_KEY:
            return self._backspace()

        if key == SPACE_KEY:
            ch = " "
        elif len(key) == 1:
            ch = key
        else:
            return None

        self.clock.start()
        index = self.cursor
        expected = self.target[index]
        correct = ch == expected
        self._log.append(Keystroke(self.clock.elapsed_ms(), ch, correct))

        if not correct:
            self.streak = 0
            self._emit(IncorrectChar(ch, expected))
            if self.on_incorrect:
                self.on_incorrect()
            return KeyResult("incorrect", False, ch, expected, index)

        self.cursor += 1
        self.streak += 1
        self._emit(CorrectChar(ch))

        completed = self.cursor >= len(self.target)
        if completed:
            self.state = EngineState.COMPLETED
        if self.on_correct:
            self.on_correct(self.streak)
        if completed and self.on_complete:
            self.on_complete()
        return KeyResult("correct", True, ch, expected, index, completed)

    def _backspace(self) -> Optional[KeyResult]:
        if self.cursor == 0:
            return None
        self.cursor -= 1
        self._emit(Backspace(self.cursor))
        return KeyResult("backspace", False, None, self.target[self.cursor], self.cursor)

    def _emit(self, event: StatEvent):
        if self.on_event is not None:
            self.on_event(event)

    # -------- queries --------
    @property
    def is_running(self) -> bool:
        return self.state is EngineState.RUNNING

    @property
    def text_length(self) -> int:
        return len(self.target)

    @property
    def progress(self) -> float:
        if not self.target:
            return 0.0
        return self.cursor / len(self.target) * 100

    @property
    def keystrokes(self) -> List[Keystroke]:
        return list(self._log)

    @property
    def remaining_text(self) -> str:
        return self.target[self.cursor:]

    @property
    def typed_text(self) -> str:
        return self.target[:self.cursor]
