"""Application configuration."""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class AppConfig:
    """Application configuration with defaults."""

    app_name: str = "PlayerSettings"
    preferences_file: str = "preferences.json"

    # Window
    window_width: int = 480
    window_height: int = 520
    appearance_mode: str = "dark"  # "dark", "light", or "system"

    @property
    def settings_dir(self) -> Path:
        return get_settings_dir(self.app_name)

    @property
    def preferences_path(self) -> Path:
        return self.settings_dir / self.preferences_file


def get_settings_dir(app_name: str) -> Path:
    """Get the appropriate settings directory for the platform."""
    if os.name == "nt":  # Windows
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:  # Linux/Mac
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

    return base / app_name
