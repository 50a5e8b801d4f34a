"""Event system for decoupled communication between components."""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Callable
import logging

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can be emitted."""

    # General signal, fired before any preference is written
    SETTINGS_WILL_CHANGE = "settings_will_change"

    # Dedicated preference streams, fired after the write
    PLAYBACK_SPEED_CHANGED = "playback_speed_changed"
    CLOSED_CAPTION_CHANGED = "closed_caption_changed"
    DOWNLOAD_QUALITY_CHANGED = "download_quality_changed"
    WIFI_ONLY_DOWNLOADS_CHANGED = "wifi_only_downloads_changed"

    # Session events
    SESSION_CHANGED = "session_changed"


@dataclass
class Event:
    """An event with type and associated data."""

    type: EventType
    data: Any = None


class EventBus:
    """Simple event bus for publish/subscribe communication."""

    def __init__(self):
        self._subscribers: dict[EventType, list[Callable[[Event], None]]] = {}

    def subscribe(self, event_type: EventType, callback: Callable[[Event], None]) -> Callable[[], None]:
        """Subscribe to events of a specific type.

        Args:
            event_type: The type of event to subscribe to
            callback: Function to call when event is published

        Returns:
            A function that removes the subscription when called
        """
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []

        if callback not in self._subscribers[event_type]:
            self._subscribers[event_type].append(callback)

        return lambda: self.unsubscribe(event_type, callback)

    def unsubscribe(self, event_type: EventType, callback: Callable[[Event], None]) -> None:
        """Unsubscribe from events of a specific type.

        Args:
            event_type: The type of event to unsubscribe from
            callback: The callback to remove
        """
        if event_type in self._subscribers:
            try:
                self._subscribers[event_type].remove(callback)
            except ValueError:
                pass

    def subscriber_count(self, event_type: EventType) -> int:
        """Get the number of callbacks registered for an event type."""
        return len(self._subscribers.get(event_type, []))

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers.

        Args:
            event: The event to publish
        """
        if event.type in self._subscribers:
            # Copy so callbacks may unsubscribe while being dispatched
            for callback in list(self._subscribers[event.type]):
                try:
                    callback(event)
                except Exception as e:
                    logger.error(f"Error in event handler for {event.type}: {e}")
