"""Main application orchestrator."""

import customtkinter as ctk
import logging
import sys
from typing import Optional

from .config import AppConfig
from .session.controller import SessionController
from .storage.backend import JsonFileBackend
from .storage.settings import SettingsManager
from .gui.settings_window import SettingsWindow

logger = logging.getLogger(__name__)


class PlayerSettingsApp:
    """Main application class that wires the store, session and window."""

    def __init__(self, config: Optional[AppConfig] = None):
        """Initialize the application.

        Args:
            config: Application configuration (defaults if None)
        """
        self._setup_logging()

        self.config = config or AppConfig()
        logger.info("Initializing Player Settings")

        self.session = SessionController()
        self.backend = JsonFileBackend(self.config.preferences_path)

        ctk.set_appearance_mode(self.config.appearance_mode)
        ctk.set_default_color_theme("blue")

        self.window = SettingsWindow(self, on_close=self.quit)

        # Session events may arrive off the Tk thread, so the reset runs via after()
        self.settings = SettingsManager(
            self.session,
            backend=self.backend,
            schedule=self.window.after,
        )
        self.window.bind_settings(self.settings)

    def _setup_logging(self) -> None:
        """Configure logging."""
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=[
                logging.StreamHandler(sys.stdout),
            ],
        )

    def run(self) -> None:
        """Start the application."""
        logger.info("Starting Player Settings")
        self.window.mainloop()

    def quit(self) -> None:
        """Quit the application."""
        logger.info("Quitting application")

        self.settings.close()

        try:
            self.window.quit()
            self.window.destroy()
        except Exception as e:
            logger.error(f"Error destroying window: {e}")


def main():
    """Application entry point."""
    app = PlayerSettingsApp()
    app.run()


if __name__ == "__main__":
    main()
