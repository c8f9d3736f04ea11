from pathlib import Path

from PySide6.QtMultimedia import QSoundEffect
from PySide6.QtCore import QUrl

SFX_DIR = Path("assets/sfx")

EFFECT_VOLUME = 0.25
AMBIENCE_VOLUME = 0.1


def combo_volume(level: int) -> float:
    """Louder with every combo tier (10, 20, 30 ... streak), capped at full volume."""
    return min(1.0, EFFECT_VOLUME + 0.15 * max(0, level - 1))


class AudioEngine:
    def __init__(self, sfx_dir: Path = SFX_DIR):
        self.key = QSoundEffect()
        self.mistake = QSoundEffect()
        self.success = QSoundEffect()
        self.unlock = QSoundEffect()
        self.combo = QSoundEffect()
        self.ambience = QSoundEffect()
        self.enabled = True
        self.music_enabled = True
        self._ambience_on = False

        def load(effect, name, volume=EFFECT_VOLUME):
            path = sfx_dir / name
            if path.exists():
                effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(volume)
        load(self.key, "key.wav")
        load(self.mistake, "mistake.wav")
        load(self.success, "success.wav")
        load(self.unlock, "unlock.wav")
        load(self.combo, "combo.wav")
        load(self.ambience, "ambience.wav", AMBIENCE_VOLUME)
        self.ambience.setLoopCount(QSoundEffect.Loop.Infinite.value)

    def set_enabled(self, enabled: bool):
        self.enabled = bool(enabled)

    # -------- background loop --------
    @property
    def ambience_playing(self) -> bool:
        return self._ambience_on

    def set_music_enabled(self, enabled: bool):
        self.music_enabled = bool(enabled)
        if self.music_enabled:
            self.start_ambience()
        else:
            self.stop_ambience()

    def start_ambience(self):
        if not self.music_enabled or self._ambience_on:
            return
        self._ambience_on = True
        self.ambience.play()

    def stop_ambience(self):
        if not self._ambience_on:
            return
        self._ambience_on = False
        self.ambience.stop()

    # -------- effects --------
    def play_keypress(self):  self.enabled and self.key.play()
    def play_mistake(self):   self.enabled and self.mistake.play()
    def play_success(self):   self.enabled and self.success.play()
    def play_unlock(self):    self.enabled and self.unlock.play()

    def play_combo(self, level: int = 1):
        if not self.enabled:
            return
        self.combo.setVolume(combo_volume(level))
        self.combo.play()
