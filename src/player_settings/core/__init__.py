"""Core modules for Player Settings."""

from .events import EventBus, Event, EventType
from .models import (
    AttachmentKind,
    DOWNLOAD_QUALITIES,
    Filter,
    PlaybackSpeed,
    PreferenceKey,
    SortFilter,
)

__all__ = [
    "EventBus",
    "Event",
    "EventType",
    "AttachmentKind",
    "DOWNLOAD_QUALITIES",
    "Filter",
    "PlaybackSpeed",
    "PreferenceKey",
    "SortFilter",
]
