# ui/results_dialog.py
from __future__ import annotations
from PySide6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton
import pyqtgraph as pg

from app.animals import motivational_message
from app.calculation import wpm_chart_series
from app.session import SessionOutcome
from app.themes import Theme
from utils.graph_helper import setup_wpm_plot, add_curve

RETRY, HOME = 1, 2


class ResultsDialog(QDialog):
    """
    Final stats, rewards and a WPM-over-time chart of the finished run.
    exec() returns RETRY or HOME.
    """

    def __init__(self, outcome: SessionOutcome, theme: Theme, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Results")
        self.resize(720, 480)
        s = outcome.stats

        root = QVBoxLayout(self)
        root.addWidget(QLabel(f"<h2>Grade {outcome.grade}</h2>"))
        root.addWidget(QLabel(f"WPM: {s.wpm}" + ("   🏆 New record!" if outcome.new_record else "")))
        root.addWidget(QLabel(f"Accuracy: {s.accuracy}%"))
        root.addWidget(QLabel(f"Time: {s.formatted_time}"))
        root.addWidget(QLabel(f"Best streak: {s.max_streak}"))
        root.addWidget(QLabel(f"🍌 +{outcome.bananas}  (total {outcome.total_bananas})"))
        if outcome.new_animal is not None:
            a = outcome.new_animal
            root.addWidget(QLabel(f"New friend unlocked: {a.emoji} {a.name}"))
        if outcome.egg_earned:
            root.addWidget(QLabel("🥚 You found a mystery egg!"))
        root.addWidget(QLabel(motivational_message(s.wpm)))

        plot = pg.PlotWidget()
        setup_wpm_plot(plot)
        x, y = wpm_chart_series(outcome.keystrokes)
        add_curve(plot, x, y, theme.accent)
        root.addWidget(plot, stretch=1)

        row = QHBoxLayout()
        btn_retry = QPushButton("Play again", self)
        btn_retry.clicked.connect(lambda: self.done(RETRY))
        btn_home = QPushButton("Home", self)
        btn_home.clicked.connect(lambda: self.done(HOME))
        row.addWidget(btn_retry)
        row.addWidget(btn_home)
        root.addLayout(row)
