"""
Shared fixtures.
"""

import pytest

from sleeper_draftbot.config import MultiPickConfig, Settings
from sleeper_draftbot.services.identity import (
    IdentityResolver,
    LegacyMapStrategy,
    StoredPlayerStrategy,
)
from sleeper_draftbot.services.tracker import DraftTracker
from tests.fakes import FakeMessenger, FakeSleeper, FakeStore, Recorder


@pytest.fixture
def settings():
    return Settings(_env_file=None, slack_bot_token="", slack_signing_secret="")


@pytest.fixture
def config():
    return MultiPickConfig()


@pytest.fixture
def sleeper():
    return FakeSleeper()


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def messenger():
    return FakeMessenger()


@pytest.fixture
def emit():
    return Recorder()


@pytest.fixture
def identities(store):
    return IdentityResolver([StoredPlayerStrategy(store), LegacyMapStrategy({})])


@pytest.fixture
def tracker(sleeper, store, identities, config, messenger):
    return DraftTracker(
        client=sleeper,
        store=store,
        identities=identities,
        config=config,
        messenger=messenger,
    )
