# app/session.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional, Protocol
import logging

from app.animals import Animal, reward_for_wpm
from app.config import (
    COMBO_EVERY_N_STREAK,
    EGG_EVERY_N_SESSIONS,
    TREE_EVERY_N_SESSIONS,
)
from app.texts import TextLibrary
from core.clock import SessionClock, monotonic_ms
from services.ghost import GhostReplay
from services.stats import (
    FinalStats,
    LiveStats,
    StatsCalculator,
    calculate_bananas,
    check_milestones,
    get_grade,
)
from services.typing_engine import EngineState, KeyResult, TypingEngine
from utils.storage import Storage

log = logging.getLogger(__name__)


class Ticker(Protocol):
    def start(self): ...
    def stop(self): ...


class Presenter(Protocol):
    def show_key(self, result: KeyResult, progress: float): ...
    def show_tick(self, update: "TickUpdate"): ...
    def show_combo(self, streak: int): ...
    def show_results(self, outcome: "SessionOutcome"): ...


@dataclass(frozen=True)
class TickUpdate:
    stats: LiveStats
    ghost_percentage: Optional[float]


@dataclass
class SessionOutcome:
    stats: FinalStats
    grade: str
    bananas: int
    total_bananas: int
    new_record: bool
    new_animal: Optional[Animal]
    ghost_saved: bool
    sessions_completed: int
    egg_earned: bool
    tree_level: int
    daily: bool
    milestones: List[str] = field(default_factory=list)
    keystrokes: list = field(default_factory=list)


@dataclass
class SessionContext:
    """Everything one game owns. Built at start, dropped at the end."""

    text: str
    clock: SessionClock
    engine: TypingEngine
    stats: StatsCalculator
    ghost: GhostReplay
    has_ghost: bool = False
    daily: bool = False
    outcome: Optional[SessionOutcome] = None

    @classmethod
    def create(cls, text: str, now_ms: Callable[[], float], daily: bool = False) -> "SessionContext":
        clock = SessionClock(now_ms)
        stats = StatsCalculator(clock)
        engine = TypingEngine(clock, on_event=stats.apply)
        engine.load(text)
        return cls(text, clock, engine, stats, GhostReplay(now_ms), daily=daily)


class GameController:
    """
    Drives one typing game at a time: keys in, ticks in, results out.

    The controller builds a single ticker on the first game and restarts it
    for every later one; it is stopped on completion, on quit, and on any
    tick that arrives once the engine has stopped running.
    """

    def __init__(self, storage: Storage, texts: TextLibrary,
                 presenter: Optional[Presenter] = None,
                 ticker_factory: Optional[Callable[[Callable[[], object]], Ticker]] = None,
                 now_ms: Optional[Callable[[], float]] = None,
                 today: Optional[Callable[[], date]] = None):
        self.storage = storage
        self.texts = texts
        self.presenter = presenter
        self.now_ms = now_ms or monotonic_ms
        self.today = today or date.today
        self.session: Optional[SessionContext] = None
        self._ticker_factory = ticker_factory
        self._ticker: Optional[Ticker] = None

    # -------- session boundaries --------
    def start_game(self, daily: bool = False) -> SessionContext:
        if self.session is not None and self.session.engine.is_running:
            self.quit()

        text = self.texts.daily_text(self.today()) if daily else self.texts.random_text()
        ctx = SessionContext.create(text, self.now_ms, daily=daily)
        ctx.engine.set_callbacks(on_correct=self._on_correct)

        ctx.ghost.load(self.storage.load_ghost_record())
        ctx.has_ghost = ctx.ghost.start(ctx.engine.text_length)
        self.session = ctx

        self._start_ticker()
        ctx.engine.start()
        log.info("Game started (%d chars, daily=%s, ghost=%s)",
                 ctx.engine.text_length, daily, ctx.has_ghost)
        return ctx

    def start_daily_challenge(self) -> Optional[SessionContext]:
        if self.storage.daily_challenge_done(self.today().isoformat()):
            return None
        return self.start_game(daily=True)

    def quit(self):
        """Abandon the running game. The stored ghost is left untouched."""
        self._stop_ticker()
        if self.session is None:
            return
        self.session.engine.stop()
        self.session.ghost.stop()
        log.info("Game quit")

    # -------- per event --------
    def handle_key(self, key: str) -> Optional[KeyResult]:
        ctx = self.session
        if ctx is None:
            return None
        result = ctx.engine.process_key(key)
        if result is None:
            return None
        if self.presenter:
            self.presenter.show_key(result, ctx.engine.progress)
        if result.completed:
            self._finish()
        return result

    def tick(self) -> Optional[TickUpdate]:
        ctx = self.session
        if ctx is None or ctx.engine.state is not EngineState.RUNNING:
            self._stop_ticker()
            return None
        pos = ctx.ghost.update()
        update = TickUpdate(ctx.stats.live_stats(), pos.percentage if pos else None)
        if self.presenter:
            self.presenter.show_tick(update)
        return update

    def _on_correct(self, streak: int):
        if streak > 0 and streak % COMBO_EVERY_N_STREAK == 0 and self.presenter:
            self.presenter.show_combo(streak)

    # -------- completion --------
    def _finish(self) -> SessionOutcome:
        ctx = self.session
        self._stop_ticker()
        ctx.ghost.stop()
        final = ctx.stats.end()
        bananas = calculate_bananas(final)
        total = self.storage.add_bananas(bananas)
        new_record = self.storage.save_best_wpm(final.wpm)
        self.storage.save_accuracy(final.accuracy)

        new_animal = reward_for_wpm(final.wpm, self.storage.unlocked_animals())
        if new_animal is not None:
            self.storage.unlock_animal(new_animal.id)

        keystrokes = ctx.engine.keystrokes
        ghost_saved = False
        if ctx.ghost.should_save(final.wpm):
            record = ctx.ghost.record_session(keystrokes, ctx.engine.text_length, final.wpm)
            ghost_saved = self.storage.save_ghost_record(record)

        count = self.storage.increment_sessions()
        egg = count % EGG_EVERY_N_SESSIONS == 0
        if egg:
            self.storage.add_mystery_egg()
        if count % TREE_EVERY_N_SESSIONS == 0:
            tree = self.storage.grow_tree()
        else:
            tree = self.storage.tree_level()
        if ctx.daily:
            self.storage.complete_daily_challenge(self.today().isoformat())

        outcome = SessionOutcome(
            stats=final,
            grade=get_grade(final.wpm, final.accuracy),
            bananas=bananas,
            total_bananas=total,
            new_record=new_record,
            new_animal=new_animal,
            ghost_saved=ghost_saved,
            sessions_completed=count,
            egg_earned=egg,
            tree_level=tree,
            daily=ctx.daily,
            milestones=check_milestones(final),
            keystrokes=keystrokes,
        )
        ctx.outcome = outcome
        log.info("Game finished: %d wpm, %d%% accuracy, %d bananas",
                 final.wpm, final.accuracy, bananas)
        if self.presenter:
            self.presenter.show_results(outcome)
        return outcome

    # -------- ticker --------
    def _start_ticker(self):
        # one ticker for the controller's lifetime; tick() always reads the current session
        if self._ticker is None:
            if self._ticker_factory is None:
                return
            self._ticker = self._ticker_factory(self.tick)
        self._ticker.stop()
        self._ticker.start()

    def _stop_ticker(self):
        if self._ticker is not None:
            self._ticker.stop()
