"""Typed, observable access to the stored user preferences."""

from typing import Any, Callable, Optional, TYPE_CHECKING
import logging

from ..core.events import Event, EventBus, EventType
from ..core.models import (
    AttachmentKind,
    DOWNLOAD_QUALITIES,
    Filter,
    PlaybackSpeed,
    PreferenceKey,
    SortFilter,
)
from .backend import KeyValueBackend, MemoryBackend
from .codec import CodecError, JsonCodec

if TYPE_CHECKING:
    from ..session.controller import SessionController

logger = logging.getLogger(__name__)

DEFAULT_SORT_FILTER = SortFilter.NEWEST
DEFAULT_PLAYBACK_SPEED = PlaybackSpeed.STANDARD
DEFAULT_DOWNLOAD_QUALITY = AttachmentKind.HD_VIDEO_FILE


class SettingsManager:
    """Manages user preferences stored in a key-value backend.

    Every read goes to the backend and falls back to the preference's default
    when the value is absent, corrupt or invalid. Every write happens
    immediately. Writes fire SETTINGS_WILL_CHANGE before the value is stored;
    playback speed, captions, download quality and wifi-only downloads also
    publish their new value on a dedicated event after the write.

    When the session becomes anonymous all preferences are reset.
    """

    def __init__(
        self,
        session: "SessionController",
        backend: Optional[KeyValueBackend] = None,
        codec: Optional[JsonCodec] = None,
        schedule: Optional[Callable[[int, Callable], None]] = None,
    ):
        """Initialize the settings manager.

        Args:
            session: Session controller whose sign-out triggers a reset
            backend: Where values are stored (in-memory if None)
            codec: Codec for filters and sort order
            schedule: Function to run callbacks on the UI thread, with the
                      (delay_ms, callback) signature of tkinter's after()
        """
        self._backend = backend if backend is not None else MemoryBackend()
        self._codec = codec or JsonCodec()
        self._session = session
        self._schedule = schedule
        self.events = EventBus()

        self._unsubscribe_session: Optional[Callable[[], None]] = session.subscribe(
            self._on_session_changed
        )
        logger.info("Settings manager created")

    # Lifecycle

    def reset_all(self) -> None:
        """Remove every stored preference so reads return defaults."""
        for key in PreferenceKey:
            self._backend.remove(key.value)
        logger.info("All preferences reset to defaults")

    def close(self) -> None:
        """Release the session subscription."""
        if self._unsubscribe_session is not None:
            self._unsubscribe_session()
            self._unsubscribe_session = None
            logger.info("Settings manager closed")

    @property
    def is_closed(self) -> bool:
        """Check if the manager has released its session subscription."""
        return self._unsubscribe_session is None

    def __enter__(self) -> "SettingsManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _on_session_changed(self, event: Event) -> None:
        """Handle a session change event from the session controller."""
        # Identity is read when the event arrives, a later login must not cancel the reset
        if self._session.is_authenticated:
            return

        logger.info("Session is anonymous, resetting preferences")
        if self._schedule is not None:
            self._schedule(0, self._reset_unless_closed)
        else:
            self.reset_all()

    def _reset_unless_closed(self) -> None:
        if not self.is_closed:
            self.reset_all()

    # Subscriptions

    def on_will_change(self, callback: Callable[[PreferenceKey], None]) -> Callable[[], None]:
        """Register a callback fired before any preference is written.

        Returns:
            A function that removes the callback
        """
        return self._subscribe_value(EventType.SETTINGS_WILL_CHANGE, callback)

    def on_playback_speed_changed(self, callback: Callable[[PlaybackSpeed], None]) -> Callable[[], None]:
        return self._subscribe_value(EventType.PLAYBACK_SPEED_CHANGED, callback)

    def on_closed_caption_changed(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        return self._subscribe_value(EventType.CLOSED_CAPTION_CHANGED, callback)

    def on_download_quality_changed(self, callback: Callable[[AttachmentKind], None]) -> Callable[[], None]:
        return self._subscribe_value(EventType.DOWNLOAD_QUALITY_CHANGED, callback)

    def on_wifi_only_downloads_changed(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        return self._subscribe_value(EventType.WIFI_ONLY_DOWNLOADS_CHANGED, callback)

    def _subscribe_value(self, event_type: EventType, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Subscribe a callback that receives the event data only."""
        return self.events.subscribe(event_type, lambda event: callback(event.data))

    def _will_change(self, key: PreferenceKey) -> None:
        self.events.publish(Event(EventType.SETTINGS_WILL_CHANGE, key))

    # Preferences

    @property
    def filters(self) -> set[Filter]:
        """Active content filters."""
        stored = self._backend.get(PreferenceKey.FILTERS.value)
        if not isinstance(stored, list):
            return set()

        filters = set()
        for item in stored:
            try:
                filters.add(self._codec.decode(item, Filter))
            except CodecError as e:
                logger.warning(f"Dropping unreadable filter: {e}")
        return filters

    @filters.setter
    def filters(self, value: set[Filter]) -> None:
        self._will_change(PreferenceKey.FILTERS)
        try:
            encoded = [self._codec.encode(f) for f in value]
        except (CodecError, TypeError) as e:
            logger.warning(f"Filters not saved: {e}")
            return
        self._backend.set(PreferenceKey.FILTERS.value, encoded)

    @property
    def sort_filter(self) -> SortFilter:
        """Sort order for content listings."""
        stored = self._backend.get(PreferenceKey.SORT_FILTER.value)
        if stored is None:
            return DEFAULT_SORT_FILTER

        try:
            return self._codec.decode(stored, SortFilter)
        except CodecError as e:
            logger.warning(f"Using default sort filter: {e}")
            return DEFAULT_SORT_FILTER

    @sort_filter.setter
    def sort_filter(self, value: SortFilter) -> None:
        self._will_change(PreferenceKey.SORT_FILTER)
        try:
            encoded = self._codec.encode(value)
        except CodecError as e:
            logger.warning(f"Sort filter not saved: {e}")
            return
        self._backend.set(PreferenceKey.SORT_FILTER.value, encoded)

    @property
    def playback_token(self) -> Optional[str]:
        """Token used to authorize video playback, if one has been issued."""
        stored = self._backend.get(PreferenceKey.PLAYBACK_TOKEN.value)
        return stored if isinstance(stored, str) else None

    @playback_token.setter
    def playback_token(self, value: Optional[str]) -> None:
        self._will_change(PreferenceKey.PLAYBACK_TOKEN)
        if value is None:
            self._backend.remove(PreferenceKey.PLAYBACK_TOKEN.value)
        elif isinstance(value, str):
            self._backend.set(PreferenceKey.PLAYBACK_TOKEN.value, value)
        else:
            logger.warning(f"Playback token not saved: unsupported type {type(value).__name__}")

    @property
    def playback_speed(self) -> PlaybackSpeed:
        stored = self._read_int(PreferenceKey.PLAYBACK_SPEED)
        try:
            return PlaybackSpeed(stored)
        except ValueError:
            return DEFAULT_PLAYBACK_SPEED

    @playback_speed.setter
    def playback_speed(self, value: PlaybackSpeed) -> None:
        self._will_change(PreferenceKey.PLAYBACK_SPEED)
        if not isinstance(value, PlaybackSpeed):
            logger.warning(f"Playback speed not saved: {value!r}")
            return
        self._backend.set(PreferenceKey.PLAYBACK_SPEED.value, int(value))
        self.events.publish(Event(EventType.PLAYBACK_SPEED_CHANGED, value))

    @property
    def closed_caption_on(self) -> bool:
        return self._read_bool(PreferenceKey.CLOSED_CAPTION_ON)

    @closed_caption_on.setter
    def closed_caption_on(self, value: bool) -> None:
        self._will_change(PreferenceKey.CLOSED_CAPTION_ON)
        self._backend.set(PreferenceKey.CLOSED_CAPTION_ON.value, bool(value))
        self.events.publish(Event(EventType.CLOSED_CAPTION_CHANGED, bool(value)))

    @property
    def download_quality(self) -> AttachmentKind:
        """Preferred quality for downloaded videos, HD or SD."""
        stored = self._read_int(PreferenceKey.DOWNLOAD_QUALITY)
        try:
            quality = AttachmentKind(stored)
        except ValueError:
            return DEFAULT_DOWNLOAD_QUALITY

        if quality not in DOWNLOAD_QUALITIES:
            return DEFAULT_DOWNLOAD_QUALITY
        return quality

    @download_quality.setter
    def download_quality(self, value: AttachmentKind) -> None:
        self._will_change(PreferenceKey.DOWNLOAD_QUALITY)
        if not isinstance(value, AttachmentKind):
            logger.warning(f"Download quality not saved: {value!r}")
            return
        # Kinds outside the download qualities are stored as given and read back as default
        self._backend.set(PreferenceKey.DOWNLOAD_QUALITY.value, int(value))
        self.events.publish(Event(EventType.DOWNLOAD_QUALITY_CHANGED, value))

    @property
    def wifi_only_downloads(self) -> bool:
        return self._read_bool(PreferenceKey.WIFI_ONLY_DOWNLOADS)

    @wifi_only_downloads.setter
    def wifi_only_downloads(self, value: bool) -> None:
        self._will_change(PreferenceKey.WIFI_ONLY_DOWNLOADS)
        self._backend.set(PreferenceKey.WIFI_ONLY_DOWNLOADS.value, bool(value))
        self.events.publish(Event(EventType.WIFI_ONLY_DOWNLOADS_CHANGED, bool(value)))

    def _read_int(self, key: PreferenceKey) -> Optional[int]:
        stored = self._backend.get(key.value)
        # bool is an int subclass but never a valid raw value here
        if isinstance(stored, int) and not isinstance(stored, bool):
            return stored
        return None

    def _read_bool(self, key: PreferenceKey) -> bool:
        stored = self._backend.get(key.value)
        return stored if isinstance(stored, bool) else False
