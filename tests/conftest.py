"""Global pytest configuration and fixtures."""

from logging import Logger
from pathlib import Path

import pytest
from pytest_httpserver import HTTPServer

from core import setup_test_logging
from core.config import Settings
from core.event_bus import EventBus
from core.types import Environment
from notifiers.fanout import NotificationFanout

from tests.utils.test_helpers import RecordingNotifier


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture(scope="function")
def logger() -> Logger:
    """Provide a logger instance for tests."""
    from core import get_logger

    return get_logger("test")


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Path of a config file inside the test's temp directory."""
    return tmp_path / "config.json"


@pytest.fixture
def test_settings(config_path: Path) -> Settings:
    """Settings for tests, isolated from the environment."""
    return Settings(
        environment=Environment.TESTING,
        config_path=config_path,
        http_timeout_seconds=5.0,
        log_level="DEBUG",
    )


@pytest.fixture
def exchange_settings(httpserver: HTTPServer, test_settings: Settings) -> Settings:
    """Settings pointing the exchange info endpoint at the test server."""
    return test_settings.model_copy(
        update={"exchange_info_url": httpserver.url_for("/info")}
    )


@pytest.fixture
def event_bus() -> EventBus:
    """Event bus with room for every event a test produces."""
    return EventBus(max_size=1000)


@pytest.fixture
def notifiers() -> dict[str, RecordingNotifier]:
    """Recording notifiers created by the fanout fixture, by key."""
    return {}


@pytest.fixture
def fanout(notifiers: dict[str, RecordingNotifier]) -> NotificationFanout:
    """Fanout with one recording key."""

    def factory(key: str) -> RecordingNotifier:
        notifiers[key] = RecordingNotifier(key)
        return notifiers[key]

    return NotificationFanout(["key-1"], notifier_factory=factory)
