from typing import List, Sequence, Tuple

from services.typing_engine import Keystroke


def split_log(keystrokes: Sequence[Keystroke]) -> Tuple[List[bool], List[float]]:
    """Keystroke log -> (correct flags, timestamps in seconds)."""
    flags = [k.correct for k in keystrokes]
    times = [k.timestamp_ms / 1000.0 for k in keystrokes]
    return flags, times


def smooth(values: List[float], factor: float = 0.25) -> List[float]:
    out, last = [], None
    for v in values:
        last = v if last is None else last + factor * (v - last)
        out.append(last)
    return out


def rolling_wpm(keystrokes: Sequence[Keystroke], window_sec: float = 10.0) -> List[float]:
    """
    WPM over a sliding window (default 10s), one value per keystroke.
    WPM = (correct chars in window / 5) / (window / 60)
    """
    flags, timestamps = split_log(keystrokes)
    n = len(timestamps)
    if n == 0:
        return []
    out: List[float] = []
    start_idx = 0
    correct = 0
    for i in range(n):
        t_now = timestamps[i]
        if flags[i]:
            correct += 1
        while start_idx < i and timestamps[start_idx] < t_now - window_sec:
            if flags[start_idx]:
                correct -= 1
            start_idx += 1
        dur = max(0.5, t_now - max(timestamps[start_idx], t_now - window_sec))
        out.append((correct / 5.0) / (dur / 60.0))
    return out


def wpm_chart_series(keystrokes: Sequence[Keystroke]) -> Tuple[List[float], List[float]]:
    """(x seconds, smoothed WPM) for the results chart."""
    _, times = split_log(keystrokes)
    return times, smooth(rolling_wpm(keystrokes))
