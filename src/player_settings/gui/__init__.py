"""GUI components."""

from .settings_window import SettingsWindow

__all__ = ["SettingsWindow"]
