"""Settings window bound to the preference store."""

import customtkinter as ctk
from typing import TYPE_CHECKING, Callable, Optional
import logging
import uuid

from ..core.events import Event
from ..core.models import (
    DOWNLOAD_QUALITIES,
    PlaybackSpeed,
    PreferenceKey,
    SortFilter,
)
from ..session.controller import User

if TYPE_CHECKING:
    from ..app import PlayerSettingsApp
    from ..storage.settings import SettingsManager

logger = logging.getLogger(__name__)


class SettingsWindow(ctk.CTk):
    """Main window showing every preference."""

    def __init__(
        self,
        app: "PlayerSettingsApp",
        on_close: Optional[Callable] = None,
        **kwargs,
    ):
        """Initialize the settings window.

        Args:
            app: The main application instance
            on_close: Callback when window is closed
            **kwargs: Additional arguments for CTk
        """
        super().__init__(**kwargs)

        self.app = app
        self._on_close = on_close
        self._settings: Optional["SettingsManager"] = None
        self._unsubscribers: list[Callable[[], None]] = []

        self._sort_names = {s.display_name: s for s in SortFilter}
        self._speed_names = {s.display_name: s for s in PlaybackSpeed}
        self._quality_names = {q.display_name: q for q in DOWNLOAD_QUALITIES}

        self._setup_window()
        self._setup_ui()

        self.protocol("WM_DELETE_WINDOW", self._handle_close)

    def _setup_window(self) -> None:
        """Configure the window."""
        self.title("Settings")

        width = self.app.config.window_width
        height = self.app.config.window_height

        screen_width = self.winfo_screenwidth()
        screen_height = self.winfo_screenheight()
        x = (screen_width - width) // 2
        y = (screen_height - height) // 2

        self.geometry(f"{width}x{height}+{x}+{y}")
        self.minsize(400, 440)

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        self.grid_columnconfigure(0, weight=1)

        self._setup_session_section()
        self._setup_library_section()
        self._setup_playback_section()
        self._setup_downloads_section()

        self.status_label = ctk.CTkLabel(self, text="", text_color="gray")
        self.status_label.grid(row=4, column=0, sticky="w", padx=15, pady=(5, 10))

    def _section(self, row: int, title: str) -> ctk.CTkFrame:
        frame = ctk.CTkFrame(self)
        frame.grid(row=row, column=0, sticky="ew", padx=10, pady=5)
        frame.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            frame,
            text=title,
            font=ctk.CTkFont(size=14, weight="bold"),
        ).grid(row=0, column=0, columnspan=2, sticky="w", padx=10, pady=(10, 5))

        return frame

    def _setup_session_section(self) -> None:
        frame = self._section(0, "Account")

        self.username_entry = ctk.CTkEntry(frame, placeholder_text="Username")
        self.username_entry.grid(row=1, column=0, sticky="ew", padx=10, pady=5)

        self.session_button = ctk.CTkButton(
            frame,
            text="Sign in",
            width=100,
            command=self._handle_session_button,
        )
        self.session_button.grid(row=1, column=1, sticky="e", padx=10, pady=5)

        self.session_label = ctk.CTkLabel(frame, text="", text_color="gray")
        self.session_label.grid(row=2, column=0, columnspan=2, sticky="w", padx=10, pady=(0, 10))

    def _setup_library_section(self) -> None:
        frame = self._section(1, "Library")

        ctk.CTkLabel(frame, text="Sort by").grid(row=1, column=0, sticky="w", padx=10, pady=(5, 10))
        self.sort_var = ctk.StringVar()
        ctk.CTkOptionMenu(
            frame,
            variable=self.sort_var,
            values=list(self._sort_names),
            command=self._handle_sort_change,
            width=150,
        ).grid(row=1, column=1, sticky="e", padx=10, pady=(5, 10))

    def _setup_playback_section(self) -> None:
        frame = self._section(2, "Playback")

        ctk.CTkLabel(frame, text="Speed").grid(row=1, column=0, sticky="w", padx=10, pady=5)
        self.speed_var = ctk.StringVar()
        ctk.CTkOptionMenu(
            frame,
            variable=self.speed_var,
            values=list(self._speed_names),
            command=self._handle_speed_change,
            width=150,
        ).grid(row=1, column=1, sticky="e", padx=10, pady=5)

        self.captions_var = ctk.BooleanVar()
        ctk.CTkCheckBox(
            frame,
            text="Closed captions",
            variable=self.captions_var,
            command=self._handle_captions_toggle,
        ).grid(row=2, column=0, columnspan=2, sticky="w", padx=10, pady=(5, 10))

    def _setup_downloads_section(self) -> None:
        frame = self._section(3, "Downloads")

        ctk.CTkLabel(frame, text="Quality").grid(row=1, column=0, sticky="w", padx=10, pady=5)
        self.quality_var = ctk.StringVar()
        ctk.CTkOptionMenu(
            frame,
            variable=self.quality_var,
            values=list(self._quality_names),
            command=self._handle_quality_change,
            width=150,
        ).grid(row=1, column=1, sticky="e", padx=10, pady=5)

        self.wifi_only_var = ctk.BooleanVar()
        ctk.CTkCheckBox(
            frame,
            text="Download over Wi-Fi only",
            variable=self.wifi_only_var,
            command=self._handle_wifi_only_toggle,
        ).grid(row=2, column=0, columnspan=2, sticky="w", padx=10, pady=(5, 10))

    def bind_settings(self, settings: "SettingsManager") -> None:
        """Attach the settings manager and show its current values.

        Args:
            settings: The settings manager to display and edit
        """
        self._settings = settings

        self._unsubscribers = [
            settings.on_will_change(self._on_will_change),
            settings.on_playback_speed_changed(
                lambda speed: self.set_status(f"Playback speed set to {speed.display_name}")
            ),
            settings.on_closed_caption_changed(
                lambda on: self.set_status("Captions on" if on else "Captions off")
            ),
            settings.on_download_quality_changed(
                lambda quality: self.set_status(f"Downloads will use {quality.display_name}")
            ),
            settings.on_wifi_only_downloads_changed(
                lambda on: self.set_status("Downloads limited to Wi-Fi" if on else "Downloads on any network")
            ),
            # Subscribed after the settings manager, so its reset is queued first
            self.app.session.subscribe(self._on_session_changed),
        ]

        self.refresh()

    def refresh(self) -> None:
        """Reload every widget from the stored preferences."""
        if self._settings is None:
            return

        self.sort_var.set(self._settings.sort_filter.display_name)
        self.speed_var.set(self._settings.playback_speed.display_name)
        self.captions_var.set(self._settings.closed_caption_on)
        self.quality_var.set(self._settings.download_quality.display_name)
        self.wifi_only_var.set(self._settings.wifi_only_downloads)

        user = self.app.session.user
        if user is not None:
            self.session_label.configure(text=f"Signed in as {user.username}")
            self.session_button.configure(text="Sign out")
        else:
            self.session_label.configure(text="Not signed in")
            self.session_button.configure(text="Sign in")

    def set_status(self, text: str) -> None:
        """Show a message in the status bar."""
        self.status_label.configure(text=text)

    def _on_will_change(self, key: PreferenceKey) -> None:
        logger.debug(f"Preference about to change: {key.value}")

    def _on_session_changed(self, event: Event) -> None:
        self.after(0, self.refresh)

    def _handle_session_button(self) -> None:
        session = self.app.session
        if session.is_authenticated:
            session.logout()
            self.set_status("Signed out, preferences reset")
            return

        username = self.username_entry.get().strip()
        if not username:
            self.set_status("Enter a username to sign in")
            return

        session.login(User(user_id=uuid.uuid4().hex, username=username))

    def _handle_sort_change(self, name: str) -> None:
        if self._settings is not None:
            self._settings.sort_filter = self._sort_names[name]

    def _handle_speed_change(self, name: str) -> None:
        if self._settings is not None:
            self._settings.playback_speed = self._speed_names[name]

    def _handle_captions_toggle(self) -> None:
        if self._settings is not None:
            self._settings.closed_caption_on = self.captions_var.get()

    def _handle_quality_change(self, name: str) -> None:
        if self._settings is not None:
            self._settings.download_quality = self._quality_names[name]

    def _handle_wifi_only_toggle(self) -> None:
        if self._settings is not None:
            self._settings.wifi_only_downloads = self.wifi_only_var.get()

    def _handle_close(self) -> None:
        """Handle window close event."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

        if self._on_close:
            self._on_close()
        else:
            self.destroy()
