# services/stats.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Union
import math

from core.clock import SessionClock


def round_half_up(x: float) -> int:
    # round() is banker's rounding; scores round .5 upwards
    return int(math.floor(x + 0.5))


# -------- events emitted by the typing engine --------
@dataclass(frozen=True)
class CorrectChar:
    char: str


@dataclass(frozen=True)
class IncorrectChar:
    char: str
    expected: Optional[str]


@dataclass(frozen=True)
class Backspace:
    index: int


StatEvent = Union[CorrectChar, IncorrectChar, Backspace]


@dataclass(frozen=True)
class LiveStats:
    wpm: int
    accuracy: int
    formatted_time: str
    streak: int


@dataclass(frozen=True)
class FinalStats:
    wpm: int
    accuracy: int
    time: int
    formatted_time: str
    total_chars: int
    correct_chars: int
    incorrect_chars: int
    max_streak: int


GRADES = [
    # (grade, min wpm, min accuracy) -- first match wins
    ("S", 70, 95),
    ("A", 60, 90),
    ("B", 50, 85),
    ("C", 40, 80),
    ("D", 30, 75),
]


class StatsCalculator:
    def __init__(self, clock: Optional[SessionClock] = None):
        self.clock = clock or SessionClock()
        self.reset()

    def reset(self):
        self.total_chars = 0
        self.correct_chars = 0
        self.incorrect_chars = 0
        self.current_streak = 0
        self.max_streak = 0

    # -------- mutations --------
    def apply(self, event: StatEvent):
        if isinstance(event, CorrectChar):
            self.record_correct()
        elif isinstance(event, IncorrectChar):
            self.record_incorrect()
        elif isinstance(event, Backspace):
            self.record_backspace()

    def record_correct(self):
        self.clock.start()
        self.total_chars += 1
        self.correct_chars += 1
        self.current_streak += 1
        self.max_streak = max(self.max_streak, self.current_streak)

    def record_incorrect(self):
        self.clock.start()
        self.total_chars += 1
        self.incorrect_chars += 1
        self.current_streak = 0

    def record_backspace(self):
        # Does not know whether the erased char was correct; always takes it
        # off correct_chars. Kept as-is for score compatibility.
        if self.total_chars > 0:
            self.total_chars -= 1
            if self.correct_chars > 0:
                self.correct_chars -= 1

    # -------- derived --------
    def calculate_wpm(self) -> int:
        if not self.clock.started:
            return 0
        seconds = self.clock.elapsed_ms() / 1000.0
        if seconds <= 0:
            return 0
        words = self.correct_chars / 5.0
        minutes = seconds / 60.0
        return max(0, round_half_up(words / minutes))

    def calculate_accuracy(self) -> int:
        if self.total_chars == 0:
            return 100
        return round_half_up(self.correct_chars / self.total_chars * 100.0)

    def elapsed_seconds(self) -> int:
        if not self.clock.started:
            return 0
        return round_half_up(self.clock.elapsed_ms() / 1000.0)

    def formatted_time(self) -> str:
        seconds = self.elapsed_seconds()
        return f"{seconds // 60}:{seconds % 60:02d}"

    def live_stats(self) -> LiveStats:
        return LiveStats(
            wpm=self.calculate_wpm(),
            accuracy=self.calculate_accuracy(),
            formatted_time=self.formatted_time(),
            streak=self.current_streak,
        )

    def end(self) -> FinalStats:
        """Freeze the clock and return the final numbers."""
        self.clock.stop()
        return FinalStats(
            wpm=self.calculate_wpm(),
            accuracy=self.calculate_accuracy(),
            time=self.elapsed_seconds(),
            formatted_time=self.formatted_time(),
            total_chars=self.total_chars,
            correct_chars=self.correct_chars,
            incorrect_chars=self.incorrect_chars,
            max_streak=self.max_streak,
        )


# -------- rewards --------
def calculate_bananas(stats: FinalStats) -> int:
    bananas = int(math.floor(stats.wpm / 5))
    if stats.accuracy == 100:
        bananas += 10
    elif stats.accuracy >= 95:
        bananas += 5
    elif stats.accuracy >= 90:
        bananas += 2
    bananas += int(stats.max_streak // 10)
    return max(1, bananas)


def get_grade(wpm: float, accuracy: float) -> str:
    for grade, min_wpm, min_acc in GRADES:
        if wpm >= min_wpm and accuracy >= min_acc:
            return grade
    return "E"


def check_milestones(stats: FinalStats) -> List[str]:
    milestones = []
    if stats.wpm >= 50:
        milestones.append("speed_demon")
    if stats.wpm >= 70:
        milestones.append("typing_master")
    if stats.accuracy == 100:
        milestones.append("perfect_accuracy")
    if stats.accuracy >= 95:
        milestones.append("high_accuracy")
    if stats.max_streak >= 50:
        milestones.append("streak_champion")
    if stats.max_streak >= 100:
        milestones.append("combo_master")
    return milestones


def calculate_improvement(current_wpm: float, previous_best: float) -> int:
    if previous_best == 0:
        return 0
    return round_half_up((current_wpm - previous_best) / previous_best * 100.0)
