"""Preference keys and value types."""

from enum import Enum, IntEnum
from dataclasses import dataclass


class PreferenceKey(str, Enum):
    """Backend key for every stored preference.

    Iterating this enum yields the complete key set; bulk reset relies on it.
    """

    FILTERS = "filters"
    SORT_FILTER = "sortFilters"
    PLAYBACK_TOKEN = "playbackToken"
    PLAYBACK_SPEED = "playbackSpeed"
    CLOSED_CAPTION_ON = "closedCaptionOn"
    DOWNLOAD_QUALITY = "downloadQuality"
    WIFI_ONLY_DOWNLOADS = "wifiOnlyDownloads"


@dataclass(frozen=True)
class Filter:
    """One content filter, e.g. a platform or a difficulty level."""

    group_name: str
    key: str
    value: str
    display_name: str = ""
    is_on: bool = True


class SortFilter(Enum):
    """Sort order for content listings."""

    NEWEST = "newest"
    OLDEST = "oldest"
    POPULARITY = "popularity"

    @property
    def display_name(self) -> str:
        return _SORT_NAMES[self]


_SORT_NAMES = {
    SortFilter.NEWEST: "Newest",
    SortFilter.OLDEST: "Oldest",
    SortFilter.POPULARITY: "Popularity",
}


class PlaybackSpeed(IntEnum):
    """Video playback speed, stored by its integer raw value."""

    HALF = 0
    STANDARD = 1
    ONE_POINT_FIVE = 2
    DOUBLE = 3

    @property
    def rate(self) -> float:
        """Playback rate multiplier."""
        return _SPEED_RATES[self]

    @property
    def display_name(self) -> str:
        return f"{self.rate:g}x"


_SPEED_RATES = {
    PlaybackSpeed.HALF: 0.5,
    PlaybackSpeed.STANDARD: 1.0,
    PlaybackSpeed.ONE_POINT_FIVE: 1.5,
    PlaybackSpeed.DOUBLE: 2.0,
}


class AttachmentKind(IntEnum):
    """Kinds of video attachment a content item can offer."""

    NONE = 0
    STREAM = 1
    SD_VIDEO_FILE = 2
    HD_VIDEO_FILE = 3

    @property
    def display_name(self) -> str:
        return _KIND_NAMES[self]


_KIND_NAMES = {
    AttachmentKind.NONE: "None",
    AttachmentKind.STREAM: "Stream",
    AttachmentKind.SD_VIDEO_FILE: "SD",
    AttachmentKind.HD_VIDEO_FILE: "HD",
}

# Only downloadable files are valid download qualities
DOWNLOAD_QUALITIES = (AttachmentKind.HD_VIDEO_FILE, AttachmentKind.SD_VIDEO_FILE)
