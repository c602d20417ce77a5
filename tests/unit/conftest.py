"""Shared fixtures for unit tests."""

from typing import cast

import pytest
from pytest_mock import MockerFixture, MockType
from starlette.requests import Request

from src.core.config import Settings


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Provide a Settings object built from test environment variables.

    Returns:
        Settings: Real settings object with test values.
    """
    monkeypatch.setenv("APP_NAME", "TestCatalog")
    monkeypatch.setenv("APP_VERSION", "9.9.9")
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("API_HOST", "127.0.0.1")
    monkeypatch.setenv("API_PORT", "3000")
    return Settings()


@pytest.fixture
def mock_request(mocker: MockerFixture) -> MockType:
    """Create a mock request whose app carries no settings.

    Returns:
        MockType: Mock request with method, path and app state.
    """
    request = mocker.Mock(spec=Request)
    request.method = "GET"
    request.url = mocker.Mock()
    request.url.path = "/api/resources"
    request.headers = {}
    request.app = mocker.Mock()
    request.app.state = mocker.Mock()
    request.app.state.settings = None
    return cast("MockType", request)
