# ui/collection_dialog.py
from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
)
from PySide6.QtCore import Qt

from app.animals import ANIMALS, LEGENDARY_ANIMALS, next_animal_to_unlock, unlock_progress


class CollectionDialog(QDialog):
    def __init__(self, unlocked, best_wpm: int, parent=None):
        """
        unlocked: iterable of animal ids the player owns
        """
        super().__init__(parent)
        self.setWindowTitle("Animal Collection")
        self.resize(680, 520)
        have = set(unlocked)

        root = QVBoxLayout(self)
        nxt = next_animal_to_unlock(have)
        if nxt is None:
            root.addWidget(QLabel("Every animal is unlocked!"))
        else:
            pct = unlock_progress(best_wpm, have)
            root.addWidget(QLabel(f"Next: {nxt.emoji} {nxt.name} at {nxt.min_wpm} WPM ({pct:.0f}%)"))

        rows = ANIMALS + [a for a in LEGENDARY_ANIMALS if a.id in have]
        self.table = QTableWidget(len(rows), 3, self)
        self.table.setHorizontalHeaderLabels(["Animal", "Requirement", "About"])
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        for r, a in enumerate(rows):
            owned = a.id in have
            name = QTableWidgetItem(f"{a.emoji} {a.name}" if owned else f"🔒 {a.name}")
            if a.max_wpm:
                req = "✅ Unlocked" if owned else f"{a.min_wpm} WPM to unlock"
            else:
                req = "🥚 Legendary"
            req_item = QTableWidgetItem(req)
            req_item.setTextAlignment(Qt.AlignCenter)
            self.table.setItem(r, 0, name)
            self.table.setItem(r, 1, req_item)
            self.table.setItem(r, 2, QTableWidgetItem(a.description))
        self.table.resizeColumnsToContents()
        root.addWidget(self.table, stretch=1)

        btn = QPushButton("Back", self)
        btn.clicked.connect(self.accept)
        root.addWidget(btn)
