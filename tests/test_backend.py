"""Tests for the key-value backends."""

import json

import pytest

from player_settings.core.models import PlaybackSpeed, SortFilter
from player_settings.storage.backend import JsonFileBackend, MemoryBackend
from player_settings.storage.settings import SettingsManager


@pytest.fixture(params=["memory", "file"])
def any_backend(request, tmp_path):
    if request.param == "memory":
        return MemoryBackend()
    return JsonFileBackend(tmp_path / "preferences.json")


def test_get_missing_returns_default(any_backend):
    assert any_backend.get("missing") is None
    assert any_backend.get("missing", 5) == 5
    assert not any_backend.contains("missing")


def test_set_replaces_value(any_backend):
    any_backend.set("speed", 1)
    any_backend.set("speed", 3)

    assert any_backend.get("speed") == 3
    assert any_backend.contains("speed")


def test_remove_is_idempotent(any_backend):
    any_backend.set("token", "abc")

    any_backend.remove("token")
    any_backend.remove("token")

    assert not any_backend.contains("token")
    assert list(any_backend.keys()) == []


def test_file_backend_persists_across_instances(tmp_path):
    path = tmp_path / "preferences.json"
    first = JsonFileBackend(path)
    first.set("closedCaptionOn", True)
    first.set("filters", [b'{"a": 1}', b"\x00\x01"])
    first.set("playbackToken", "__bytes__")

    second = JsonFileBackend(path)

    assert second.get("closedCaptionOn") is True
    assert second.get("filters") == [b'{"a": 1}', b"\x00\x01"]
    assert second.get("playbackToken") == "__bytes__"


def test_file_backend_writes_through(tmp_path):
    path = tmp_path / "nested" / "preferences.json"
    backend = JsonFileBackend(path)

    backend.set("playbackSpeed", 2)

    with open(path, "r", encoding="utf-8") as f:
        assert json.load(f) == {"playbackSpeed": 2}

    backend.remove("playbackSpeed")

    with open(path, "r", encoding="utf-8") as f:
        assert json.load(f) == {}


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", '{"x": {"__bytes__": "abc"}}'])
def test_file_backend_starts_empty_on_unreadable_file(tmp_path, content):
    path = tmp_path / "preferences.json"
    path.write_text(content, encoding="utf-8")

    backend = JsonFileBackend(path)

    assert list(backend.keys()) == []


def test_settings_survive_restart(tmp_path, session):
    path = tmp_path / "preferences.json"

    with SettingsManager(session, backend=JsonFileBackend(path)) as manager:
        manager.sort_filter = SortFilter.POPULARITY
        manager.playback_speed = PlaybackSpeed.HALF

    with SettingsManager(session, backend=JsonFileBackend(path)) as manager:
        assert manager.sort_filter is SortFilter.POPULARITY
        assert manager.playback_speed is PlaybackSpeed.HALF


def test_file_backend_unserializable_value_leaves_file_intact(tmp_path):
    path = tmp_path / "preferences.json"
    backend = JsonFileBackend(path)
    backend.set("playbackSpeed", 2)

    backend.set("broken", object())

    assert not (tmp_path / "preferences.json.tmp").exists()
    with open(path, "r", encoding="utf-8") as f:
        assert json.load(f) == {"playbackSpeed": 2}
