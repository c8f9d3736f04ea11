from .settings_dialog import SettingsDialog

__all__ = ["SettingsDialog"]
