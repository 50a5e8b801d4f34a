"""Tests for change notifications published by SettingsManager."""

import pytest

from player_settings.core.events import EventType
from player_settings.core.models import (
    AttachmentKind,
    Filter,
    PlaybackSpeed,
    PreferenceKey,
    SortFilter,
)

DEDICATED_STREAMS = [
    EventType.PLAYBACK_SPEED_CHANGED,
    EventType.CLOSED_CAPTION_CHANGED,
    EventType.DOWNLOAD_QUALITY_CHANGED,
    EventType.WIFI_ONLY_DOWNLOADS_CHANGED,
]


@pytest.fixture
def dedicated(settings):
    """Record every event published on the dedicated streams."""
    events = []
    for event_type in DEDICATED_STREAMS:
        settings.events.subscribe(event_type, events.append)
    return events


def test_playback_speed_emits_once_on_each_channel(settings, recorder, dedicated):
    will_change = []
    settings.on_will_change(will_change.append)
    settings.on_playback_speed_changed(recorder)

    settings.playback_speed = PlaybackSpeed.ONE_POINT_FIVE

    assert recorder.calls == [PlaybackSpeed.ONE_POINT_FIVE]
    assert will_change == [PreferenceKey.PLAYBACK_SPEED]
    assert len(dedicated) == 1


def test_closed_caption_stream(settings, recorder):
    settings.on_closed_caption_changed(recorder)

    settings.closed_caption_on = True
    settings.closed_caption_on = False

    assert recorder.calls == [True, False]


def test_download_quality_stream(settings, recorder):
    settings.on_download_quality_changed(recorder)

    settings.download_quality = AttachmentKind.SD_VIDEO_FILE

    assert recorder.calls == [AttachmentKind.SD_VIDEO_FILE]


def test_wifi_only_downloads_stream(settings, recorder):
    settings.on_wifi_only_downloads_changed(recorder)

    settings.wifi_only_downloads = True

    assert recorder.calls == [True]


@pytest.mark.parametrize(
    "name, value",
    [
        ("filters", {Filter(group_name="Content", key="content_types[]", value="screencast")}),
        ("sort_filter", SortFilter.POPULARITY),
        ("playback_token", "token"),
    ],
)
def test_preferences_without_dedicated_stream(settings, recorder, dedicated, name, value):
    settings.on_will_change(recorder)

    setattr(settings, name, value)

    assert dedicated == []
    assert len(recorder.calls) == 1


def test_will_change_fires_before_write(settings):
    seen = []
    settings.on_will_change(lambda key: seen.append(settings.playback_speed))

    settings.playback_speed = PlaybackSpeed.DOUBLE

    assert seen == [PlaybackSpeed.STANDARD]


def test_dedicated_stream_fires_after_write(settings):
    seen = []
    settings.on_playback_speed_changed(lambda speed: seen.append(settings.playback_speed))

    settings.playback_speed = PlaybackSpeed.HALF

    assert seen == [PlaybackSpeed.HALF]


def test_reset_all_emits_nothing(settings, recorder, dedicated):
    settings.closed_caption_on = True
    dedicated.clear()
    settings.on_will_change(recorder)

    settings.reset_all()

    assert recorder.calls == []
    assert dedicated == []


def test_unsubscribe_stops_delivery(settings, recorder):
    unsubscribe = settings.on_playback_speed_changed(recorder)
    unsubscribe()

    settings.playback_speed = PlaybackSpeed.DOUBLE

    assert recorder.calls == []


def test_failing_listener_does_not_break_setter(settings, recorder):
    def broken(value):
        raise RuntimeError("listener failed")

    settings.on_closed_caption_changed(broken)
    settings.on_closed_caption_changed(recorder)

    settings.closed_caption_on = True

    assert settings.closed_caption_on is True
    assert recorder.calls == [True]
