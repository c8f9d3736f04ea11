# ui/main_window.py
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QMessageBox, QPushButton, QStackedWidget
)
from PySide6.QtCore import Qt

from app.animals import ANIMALS
from app.audio import AudioEngine
from app.session import GameController, SessionOutcome
from app.texts import TextLibrary
from app.themes import stylesheet, theme_for
from core.chrono import SessionTicker
from ui.collection_dialog import CollectionDialog
from ui.results_dialog import ResultsDialog, RETRY
from ui.typing_view import TypingView
from ui.widgets import SettingsDialog
from utils.storage import Storage

TREE_STAGES = ["🌱", "🌿", "🪴", "🌳", "🌴"]


class MainWindow(QMainWindow):
    def __init__(self, storage: Storage | None = None):
        super().__init__()
        self.setWindowTitle("Jungle Typing")
        self.resize(1100, 700)

        self.storage = storage or Storage()
        self.settings = self.storage.load_settings()
        self.texts = TextLibrary(self.settings.difficulty)
        self.audio = AudioEngine()

        self.stack = QStackedWidget(self)
        self.home = self._build_home()
        self.view = TypingView(self.audio, self)
        self.view.finished.connect(self._on_finished, Qt.QueuedConnection)
        self.view.quitRequested.connect(self._quit_typing)
        self.stack.addWidget(self.home)
        self.stack.addWidget(self.view)
        self.setCentralWidget(self.stack)

        self.controller = GameController(
            self.storage,
            self.texts,
            presenter=self.view,
            ticker_factory=lambda cb: SessionTicker(cb, parent=self),
        )
        self.view.controller = self.controller

        self._apply_settings()
        self._update_home()

    # ---------------- Home ----------------
    def _build_home(self):
        page = QWidget(self)
        v = QVBoxLayout(page)
        v.setContentsMargins(40, 40, 40, 40)
        v.setSpacing(24)

        title = QLabel("<h1>🐾 Jungle Typing Adventure</h1>", page)
        title.setAlignment(Qt.AlignCenter)
        v.addWidget(title)

        self.lblBest = QLabel(page)
        self.lblAnimals = QLabel(page)
        self.lblBananas = QLabel(page)
        self.lblTree = QLabel(page)
        stats = QHBoxLayout()
        for lab in (self.lblBest, self.lblAnimals, self.lblBananas, self.lblTree):
            lab.setAlignment(Qt.AlignCenter)
            stats.addWidget(lab)
        v.addLayout(stats)

        for text, handler in [
            ("Start typing", lambda: self._start_game(False)),
            ("Daily challenge", self._start_daily),
            ("Animal collection", self._open_collection),
            ("Settings", self._open_settings),
            ("Reset progress", self._reset_progress),
        ]:
            btn = QPushButton(text, page)
            btn.setFocusPolicy(Qt.NoFocus)
            btn.clicked.connect(handler)
            v.addWidget(btn)
        v.addStretch(1)
        return page

    def _update_home(self):
        unlocked = self.storage.unlocked_animals()
        level = self.storage.tree_level()
        self.lblBest.setText(f"Best: {self.storage.load_best_wpm()} WPM")
        self.lblAnimals.setText(f"Animals: {len(unlocked)}/{len(ANIMALS)}")
        self.lblBananas.setText(f"🍌 {self.storage.bananas()}")
        self.lblTree.setText(f"Tree: {TREE_STAGES[max(1, min(level, len(TREE_STAGES))) - 1]}")

    def _show_home(self):
        self._update_home()
        self.stack.setCurrentWidget(self.home)

    # ---------------- Game ----------------
    def _start_game(self, daily: bool):
        ctx = self.controller.start_game(daily=daily)
        self._enter_typing(ctx)

    def _start_daily(self):
        ctx = self.controller.start_daily_challenge()
        if ctx is None:
            QMessageBox.information(
                self, "Daily challenge",
                "You already completed today's challenge! Come back tomorrow for a new one!")
            return
        self._enter_typing(ctx)

    def _enter_typing(self, ctx):
        self.view.begin(ctx.text, ctx.has_ghost)
        self.stack.setCurrentWidget(self.view)
        self.view.setFocus()

    def _quit_typing(self):
        self.controller.quit()
        self._show_home()

    def _on_finished(self, outcome: SessionOutcome):
        dlg = ResultsDialog(outcome, theme_for(self.settings.night_mode), self)
        if dlg.exec() == RETRY:
            self._start_game(False)
        else:
            self._show_home()

    # ---------------- Dialogs ----------------
    def _open_collection(self):
        CollectionDialog(self.storage.unlocked_animals(), self.storage.load_best_wpm(), self).exec()

    def _open_settings(self):
        dlg = SettingsDialog(self.settings, self)
        if not dlg.exec():
            return
        self.settings = dlg.settings
        self.storage.save_settings(self.settings)
        self._apply_settings()

    def _apply_settings(self):
        theme = theme_for(self.settings.night_mode)
        self.setStyleSheet(stylesheet(theme))
        self.view.set_theme(theme, self.settings.font_size)
        self.texts.set_difficulty(self.settings.difficulty)
        self.audio.set_enabled(self.settings.sound_enabled)
        self.audio.set_music_enabled(self.settings.music_enabled)

    def _reset_progress(self):
        answer = QMessageBox.question(
            self, "Reset progress",
            "Reset ALL progress?\n\nThis clears unlocked animals, best WPM, bananas "
            "and ghost data. This cannot be undone!")
        if answer != QMessageBox.Yes:
            return
        self.storage.clear_all()
        self.settings = self.storage.load_settings()
        self._apply_settings()
        self._update_home()
