from __future__ import annotations
from html import escape

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget, QLabel, QVBoxLayout, QHBoxLayout, QSizePolicy, QProgressBar, QPushButton
)

from app.audio import AudioEngine
from app.config import COMBO_EVERY_N_STREAK
from app.session import GameController, SessionOutcome, TickUpdate
from app.themes import FONT_PX, Theme
from services.typing_engine import BACKSPACE_KEY, SPACE_KEY, KeyResult


class TypingView(QWidget):
    """Typing screen. Receives keys from Qt and results from the controller."""

    finished = Signal(object)   # SessionOutcome
    quitRequested = Signal()

    def __init__(self, audio: AudioEngine, parent=None):
        super().__init__(parent)
        self.setFocusPolicy(Qt.StrongFocus)
        self.controller: GameController | None = None
        self.audio = audio

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 30, 0, 30)
        root.setSpacing(28)

        stats = QHBoxLayout()
        stats.setSpacing(40)
        self.lblTimer = QLabel("0:00", self)
        self.lblTimer.setObjectName("lblTimer")
        self.lblWPM = QLabel("0 WPM", self)
        self.lblWPM.setObjectName("lblWPM")
        self.lblAcc = QLabel("100 %", self)
        self.lblAcc.setObjectName("lblAcc")
        self.lblStreak = QLabel("🔥 0", self)
        self.lblStreak.setObjectName("lblStreak")
        for lab in (self.lblTimer, self.lblWPM, self.lblAcc, self.lblStreak):
            lab.setAlignment(Qt.AlignCenter)
            stats.addWidget(lab)
        root.addLayout(stats)

        self.barPlayer = QProgressBar(self)
        self.barPlayer.setObjectName("barPlayer")
        self.barPlayer.setFormat("You %p%")
        self.barGhost = QProgressBar(self)
        self.barGhost.setObjectName("barGhost")
        self.barGhost.setFormat("👻 Best run %p%")
        for bar in (self.barPlayer, self.barGhost):
            bar.setRange(0, 1000)
            bar.setFocusPolicy(Qt.NoFocus)
            root.addWidget(bar)

        self.lblCombo = QLabel("", self)
        self.lblCombo.setAlignment(Qt.AlignCenter)
        root.addWidget(self.lblCombo)

        self.lblLine = QLabel("", self)
        self.lblLine.setObjectName("lblLine")
        self.lblLine.setTextFormat(Qt.RichText)
        self.lblLine.setWordWrap(True)
        self.lblLine.setAlignment(Qt.AlignCenter)
        self.lblLine.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.lblLine.setMinimumWidth(700)
        root.addWidget(self.lblLine, stretch=1, alignment=Qt.AlignHCenter)

        btn_quit = QPushButton("Quit", self)
        btn_quit.setFocusPolicy(Qt.NoFocus)
        btn_quit.clicked.connect(self.quitRequested.emit)
        root.addWidget(btn_quit, alignment=Qt.AlignRight)

        self._text = ""
        self._marks: dict[int, bool] = {}
        self._cursor = 0
        self._colors = {"ok": "#22c55e", "err": "#ef4444", "mut": "#9aa1a9", "caret": "#eab308"}
        self._font_px = FONT_PX["medium"]

    # -------- setup --------
    def set_theme(self, theme: Theme, font_size: str = "medium"):
        self._colors.update(ok=theme.correct, err=theme.error, mut=theme.secondary, caret=theme.accent)
        self._font_px = FONT_PX.get(font_size, FONT_PX["medium"])
        self.lblLine.setStyleSheet(f"font-size: {self._font_px}px; line-height: 1.35;")
        self._render_line()

    def begin(self, text: str, has_ghost: bool):
        self._text = text
        self._marks.clear()
        self._cursor = 0
        self.barPlayer.setValue(0)
        self.barGhost.setValue(0)
        self.barGhost.setVisible(has_ghost)
        self.lblCombo.setText("")
        self.lblTimer.setText("0:00")
        self.lblWPM.setText("0 WPM")
        self.lblAcc.setText("100 %")
        self.lblStreak.setText("🔥 0")
        self._render_line()
        self.setFocus()

    # -------- presenter --------
    def show_key(self, result: KeyResult, progress: float):
        if result.action == "backspace":
            self._marks.pop(result.index, None)
            self._cursor = result.index
        else:
            self._marks[result.index] = result.correct
            self._cursor = result.index + 1 if result.correct else result.index
            if result.correct:
                self.audio.play_keypress()
            else:
                self.audio.play_mistake()
        self.barPlayer.setValue(int(progress * 10))
        self._render_line()

    def show_tick(self, update: TickUpdate):
        s = update.stats
        self.lblTimer.setText(s.formatted_time)
        self.lblWPM.setText(f"{s.wpm} WPM")
        self.lblAcc.setText(f"{s.accuracy} %")
        self.lblStreak.setText(f"🔥 {s.streak}")
        if update.ghost_percentage is not None:
            self.barGhost.setValue(int(update.ghost_percentage * 10))

    def show_combo(self, streak: int):
        self.lblCombo.setText(f"{streak} combo!")
        self.audio.play_combo(streak // COMBO_EVERY_N_STREAK)

    def show_results(self, outcome: SessionOutcome):
        if outcome.new_animal is not None:
            self.audio.play_unlock()
        else:
            self.audio.play_success()
        self.finished.emit(outcome)

    # -------- rendering --------
    def _render_line(self):
        parts: list[str] = []
        for idx, ch in enumerate(self._text):
            glyph = escape(ch) if ch != " " else "&nbsp;"
            if idx == self._cursor:
                color = self._colors["err"] if self._marks.get(idx) is False else self._colors["caret"]
                parts.append(f'<span style="color:{color}; text-decoration:underline">{glyph}</span>')
            elif idx < self._cursor:
                parts.append(f'<span style="color:{self._colors["ok"]}">{glyph}</span>')
            else:
                parts.append(f'<span style="color:{self._colors["mut"]}">{glyph}</span>')
        self.lblLine.setText("".join(parts))

    # -------- input --------
    def keyPressEvent(self, ev):
        nk = self._normalize_key(ev)
        if nk is None or self.controller is None:
            return super().keyPressEvent(ev)
        self.controller.handle_key(nk)
        ev.accept()

    def _normalize_key(self, ev) -> str | None:
        if ev.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier):
            return None
        key = ev.key()
        t = ev.text()
        if key == Qt.Key_Backspace:
            return BACKSPACE_KEY
        if key == Qt.Key_Space:
            return SPACE_KEY
        if t and t > " ":
            return t
        return None
