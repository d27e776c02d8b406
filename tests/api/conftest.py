"""Fixtures for API tests."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from core.config import Settings


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """Test client running the app's lifespan against a temp config file."""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client
