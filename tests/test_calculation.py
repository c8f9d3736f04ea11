import pytest

from app.calculation import rolling_wpm, smooth, split_log, wpm_chart_series
from services.typing_engine import Keystroke


def _log(*entries):
    return [Keystroke(float(t), "a", ok) for t, ok in entries]


def test_split_log():
    flags, times = split_log(_log((0, True), (1500, False)))
    assert flags == [True, False]
    assert times == [0.0, 1.5]


def test_empty_log():
    assert rolling_wpm([]) == []
    assert wpm_chart_series([]) == ([], [])


def test_rolling_wpm_ignores_mistakes_and_old_keys():
    log = _log((0, True), (1_000, False), (20_000, True), (21_000, True))
    out = rolling_wpm(log, window_sec=10.0)
    assert len(out) == 4
    # last value only counts the two keys inside the 10s window
    assert out[-1] == pytest.approx((2 / 5.0) / (1.0 / 60.0))


def test_smooth_moves_toward_values():
    assert smooth([0.0, 100.0], factor=0.5) == [0.0, 50.0]


def test_chart_series_shapes():
    log = _log((0, True), (500, True), (900, False))
    x, y = wpm_chart_series(log)
    assert x == [0.0, 0.5, 0.9]
    assert len(y) == 3
