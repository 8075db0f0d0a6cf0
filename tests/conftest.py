"""Shared test fixtures for the PictureBot test suite."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from picturebot.bootstrap import create_dialog_set
from picturebot.bot import TurnRouter
from picturebot.config.models import DialogsConfig
from picturebot.conversation.stores import InMemoryStateStore
from picturebot.providers.channel import InMemoryChannel
from picturebot.providers.intent import MockIntentClassifier, RegexRecognizer
from picturebot.providers.search import MockSearchProvider


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            if self.original_env[key] is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = self.original_env[key]


@pytest.fixture
def env_override() -> Callable[[dict[str, str]], EnvOverrideContext]:
    """Temporarily set environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"PICTUREBOT_DEBUG": "true"}):
                ...
    """
    return EnvOverrideContext


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test."""
    from picturebot.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def channel() -> InMemoryChannel:
    return InMemoryChannel()


@pytest.fixture
def classifier() -> MockIntentClassifier:
    return MockIntentClassifier()


@pytest.fixture
def search_provider() -> MockSearchProvider:
    return MockSearchProvider()


@pytest.fixture
def router(store, channel, classifier, search_provider) -> TurnRouter:
    """Router over in-memory collaborators with the default quick intents."""
    return TurnRouter(
        create_dialog_set(classifier, search_provider),
        store,
        channel,
        recognizer=RegexRecognizer(DialogsConfig().quick_intents),
    )
