import pytest

from core.clock import SessionClock
from services.stats import Backspace, CorrectChar, IncorrectChar, StatsCalculator
from services.typing_engine import EngineState, Keystroke, TypingEngine


@pytest.fixture
def session_clock(clock) -> SessionClock:
    return SessionClock(clock)


@pytest.fixture
def stats(session_clock) -> StatsCalculator:
    return StatsCalculator(session_clock)


@pytest.fixture
def engine(session_clock, stats) -> TypingEngine:
    eng = TypingEngine(session_clock, on_event=stats.apply)
    eng.load("cat")
    eng.start()
    return eng


class TestStates:
    def test_starts_idle(self):
        eng = TypingEngine()
        assert eng.state is EngineState.IDLE
        assert eng.start() is False
        assert eng.process_key("a") is None

    def test_load_makes_ready_and_start_runs(self):
        eng = TypingEngine()
        eng.load("hi")
        assert eng.state is EngineState.READY
        assert eng.process_key("h") is None
        assert eng.start() is True
        assert eng.is_running

    def test_start_does_not_start_clock(self, session_clock):
        eng = TypingEngine(session_clock)
        eng.load("hi")
        eng.start()
        assert session_clock.started is False

    def test_stop_makes_input_noop(self, engine):
        engine.stop()
        assert engine.state is EngineState.STOPPED
        assert engine.process_key("c") is None
        assert engine.cursor == 0
        assert engine.keystrokes == []

    def test_reset_returns_to_ready(self, engine, session_clock):
        engine.process_key("c")
        engine.reset()
        assert engine.state is EngineState.READY
        assert engine.cursor == 0
        assert engine.keystrokes == []
        assert session_clock.started is False


class TestMatching:
    def test_cat_scenario(self, engine, stats):
        r = engine.process_key("c")
        assert r.correct and r.index == 0 and r.expected == "c"
        assert engine.cursor == 1
        assert stats.correct_chars == 1

        r = engine.process_key("x")
        assert r.action == "incorrect"
        assert r.expected == "a"
        assert r.index == 1
        assert engine.cursor == 1
        assert stats.incorrect_chars == 1
        assert stats.current_streak == 0

        r = engine.process_key("t")
        assert r.correct is False
        assert engine.cursor == 1

        r = engine.process_key("a")
        assert r.correct
        assert engine.cursor == 2
        assert stats.correct_chars == 2
        assert stats.current_streak == 1

    def test_log_keeps_wrong_keys_with_relative_times(self, engine, clock):
        clock.advance(5_000)  # idle before typing does not count
        engine.process_key("c")
        clock.advance(120)
        engine.process_key("x")
        clock.advance(80)
        engine.process_key("a")
        assert engine.keystrokes == [
            Keystroke(0.0, "c", True),
            Keystroke(120.0, "x", False),
            Keystroke(200.0, "a", True),
        ]

    def test_first_key_starts_clock_even_if_wrong(self, engine, session_clock):
        engine.process_key("z")
        assert session_clock.started

    def test_space_token(self, session_clock):
        eng = TypingEngine(session_clock)
        eng.load("a b")
        eng.start()
        eng.process_key("a")
        r = eng.process_key("Space")
        assert r.correct and r.char == " "
        assert eng.cursor == 2

    @pytest.mark.parametrize("key", ["Shift", "ArrowLeft", "Enter", "ab", ""])
    def test_multi_char_keys_ignored(self, engine, session_clock, key):
        assert engine.process_key(key) is None
        assert engine.cursor == 0
        assert engine.keystrokes == []
        assert session_clock.started is False

    def test_completion_signalled_once(self, engine):
        done = []
        engine.set_callbacks(on_complete=lambda: done.append(True))
        for ch in "cat":
            r = engine.process_key(ch)
        assert r.completed is True
        assert engine.state is EngineState.COMPLETED
        assert engine.progress == 100
        assert engine.process_key("t") is None
        assert done == [True]

    def test_callbacks_receive_streak(self, engine):
        streaks, misses = [], []
        engine.set_callbacks(on_correct=streaks.append, on_incorrect=lambda: misses.append(1))
        engine.process_key("c")
        engine.process_key("a")
        engine.process_key("q")
        engine.process_key("t")
        assert streaks == [1, 2, 1]
        assert misses == [1]

    def test_events_emitted(self, session_clock):
        events = []
        eng = TypingEngine(session_clock, on_event=events.append)
        eng.load("ab")
        eng.start()
        eng.process_key("a")
        eng.process_key("x")
        eng.process_key("Backspace")
        assert events == [CorrectChar("a"), IncorrectChar("x", "b"), Backspace(0)]


class TestBackspace:
    def test_backspace_moves_cursor_back(self, engine, stats):
        engine.process_key("c")
        r = engine.process_key("Backspace")
        assert r.action == "backspace"
        assert r.index == 0
        assert engine.cursor == 0
        assert stats.correct_chars == 0

    def test_backspace_at_start_is_noop(self, engine, session_clock):
        assert engine.process_key("Backspace") is None
        assert engine.cursor == 0
        assert session_clock.started is False

    def test_backspace_not_logged(self, engine):
        engine.process_key("c")
        engine.process_key("Backspace")
        assert len(engine.keystrokes) == 1

    @pytest.mark.parametrize("n", [0, 1, 4, 9])
    def test_type_then_erase_returns_cursor(self, session_clock, n):
        eng = TypingEngine(session_clock)
        eng.load("abcdefghijk")
        eng.start()
        eng.process_key("a")
        origin = eng.cursor
        for ch in "bcdefghijk"[:n]:
            eng.process_key(ch)
        for _ in range(n):
            eng.process_key("Backspace")
        assert eng.cursor == origin


class TestQueries:
    def test_progress_formula(self, session_clock):
        eng = TypingEngine(session_clock)
        eng.load("abcd")
        eng.start()
        assert eng.progress == 0
        eng.process_key("a")
        assert eng.progress == 25.0
        eng.process_key("b")
        eng.process_key("c")
        assert eng.progress == 75.0

    def test_progress_of_empty_text(self):
        assert TypingEngine().progress == 0.0

    def test_typed_and_remaining(self, engine):
        engine.process_key("c")
        assert engine.typed_text == "c"
        assert engine.remaining_text == "at"
        assert engine.text_length == 3

    def test_keystrokes_is_a_copy(self, engine):
        engine.process_key("c")
        engine.keystrokes.clear()
        assert len(engine.keystrokes) == 1
