"""Shared fixtures."""

import pytest

from player_settings.session.controller import SessionController, User
from player_settings.storage.backend import MemoryBackend
from player_settings.storage.settings import SettingsManager


@pytest.fixture
def user():
    return User(user_id="42", username="ray")


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def session(user):
    return SessionController(user)


@pytest.fixture
def settings(session, backend):
    manager = SettingsManager(session, backend=backend)
    yield manager
    manager.close()


class Recorder:
    """Collects values passed to a callback."""

    def __init__(self):
        self.calls = []

    def __call__(self, value):
        self.calls.append(value)


@pytest.fixture
def recorder():
    return Recorder()
