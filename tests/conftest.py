from dataclasses import dataclass, field
from datetime import date
from typing import List

import pytest

from app.session import GameController
from utils.storage import Storage


class FakeClock:
    """Millisecond time source that only moves when told to."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FakeTicker:
    def __init__(self, callback) -> None:
        self.callback = callback
        self.running = False
        self.starts = 0
        self.stops = 0

    def start(self) -> None:
        self.running = True
        self.starts += 1

    def stop(self) -> None:
        self.running = False
        self.stops += 1

    def fire(self):
        return self.callback()


@dataclass
class RecordingPresenter:
    keys: list = field(default_factory=list)
    ticks: list = field(default_factory=list)
    combos: List[int] = field(default_factory=list)
    results: list = field(default_factory=list)

    def show_key(self, result, progress):
        self.keys.append((result, progress))

    def show_tick(self, update):
        self.ticks.append(update)

    def show_combo(self, streak):
        self.combos.append(streak)

    def show_results(self, outcome):
        self.results.append(outcome)


class FixedTexts:
    def __init__(self, text: str = "cat", daily: str = "daily text") -> None:
        self.text = text
        self.daily = daily

    def random_text(self, difficulty=None) -> str:
        return self.text

    def daily_text(self, day=None) -> str:
        return self.daily


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage(tmp_path) -> Storage:
    return Storage(str(tmp_path / "progress.db"))


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def tickers() -> List[FakeTicker]:
    return []


@pytest.fixture
def texts() -> FixedTexts:
    return FixedTexts()


@pytest.fixture
def controller(storage, texts, presenter, tickers, clock) -> GameController:
    def make_ticker(cb):
        t = FakeTicker(cb)
        tickers.append(t)
        return t

    return GameController(
        storage,
        texts,
        presenter=presenter,
        ticker_factory=make_ticker,
        now_ms=clock,
        today=lambda: date(2026, 3, 14),
    )


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication

    return QCoreApplication.instance() or QCoreApplication([])
