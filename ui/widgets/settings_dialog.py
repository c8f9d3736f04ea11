from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QComboBox, QCheckBox
)

from app.config import DIFFICULTIES, FONT_SIZES, Settings


class SettingsDialog(QDialog):
    def __init__(self, settings: Settings, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setFixedSize(340, 320)

        layout = QVBoxLayout(self)
        layout.setSpacing(14)

        self.chk_sound = QCheckBox("Sound effects", self)
        self.chk_sound.setChecked(settings.sound_enabled)
        self.chk_music = QCheckBox("Jungle ambience", self)
        self.chk_music.setChecked(settings.music_enabled)
        self.chk_night = QCheckBox("Night mode", self)
        self.chk_night.setChecked(settings.night_mode)
        for chk in (self.chk_sound, self.chk_music, self.chk_night):
            layout.addWidget(chk)

        layout.addWidget(QLabel("Difficulty:", self))
        self.cmb_difficulty = QComboBox(self)
        self.cmb_difficulty.addItems(list(DIFFICULTIES))
        self.cmb_difficulty.setCurrentText(settings.difficulty)
        layout.addWidget(self.cmb_difficulty)

        layout.addWidget(QLabel("Font size:", self))
        self.cmb_font = QComboBox(self)
        self.cmb_font.addItems(list(FONT_SIZES))
        self.cmb_font.setCurrentText(settings.font_size)
        layout.addWidget(self.cmb_font)

        # Buttons
        row = QHBoxLayout()
        btn_save = QPushButton("Save", self)
        btn_save.clicked.connect(self.accept)
        btn_cancel = QPushButton("Cancel", self)
        btn_cancel.clicked.connect(self.reject)
        row.addWidget(btn_save)
        row.addWidget(btn_cancel)

        layout.addStretch(1)
        layout.addLayout(row)

    @property
    def settings(self) -> Settings:
        return Settings(
            sound_enabled=self.chk_sound.isChecked(),
            music_enabled=self.chk_music.isChecked(),
            night_mode=self.chk_night.isChecked(),
            difficulty=self.cmb_difficulty.currentText(),
            font_size=self.cmb_font.currentText(),
        )
