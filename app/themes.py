# app/themes.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List


@dataclass
class Theme:
    name: str
    background: str
    primary: str
    secondary: str
    accent: str
    correct: str = "#22c55e"
    error: str = "#ef4444"
    ghost: str = "#a1a1aa"


# -------- Built-in themes --------
THEMES: List[Theme] = [
    Theme(
        name="Jungle Day",
        background="#ecfccb",
        primary="#14532d",
        secondary="#4d7c0f",
        accent="#ca8a04",
        correct="#15803d",
        error="#dc2626",
        ghost="#78716c",
    ),
    Theme(
        name="Jungle Night",
        background="#0b1d12",
        primary="#e5e7eb",
        secondary="#86efac",
        accent="#facc15",
        ghost="#9ca3af",
    ),
]

DAY, NIGHT = 0, 1

FONT_PX = {"small": 24, "medium": 32, "large": 40}


def theme_for(night_mode: bool) -> Theme:
    return THEMES[NIGHT if night_mode else DAY]


def stylesheet(theme: Theme) -> str:
    return f"""
    QWidget {{ background: {theme.background}; color: {theme.primary}; }}
    QLabel#lblTimer, QLabel#lblAcc, QLabel#lblStreak {{ color: {theme.secondary}; }}
    QLabel#lblWPM {{ color: {theme.accent}; }}
    QProgressBar#barPlayer::chunk {{ background: {theme.accent}; }}
    QProgressBar#barGhost::chunk {{ background: {theme.ghost}; }}
    QPushButton {{
        border: 1px solid {theme.secondary};
        border-radius: 9px;
        padding: 6px 12px;
    }}
    """
