"""Fixtures for API middleware tests."""

from collections.abc import Callable
from typing import cast

import pytest
from pytest_mock import MockerFixture, MockType
from starlette.responses import Response


@pytest.fixture
def downstream_response() -> Response:
    """A plain response the wrapped application returns."""
    return Response(content=b"{}", status_code=200, media_type="application/json")


@pytest.fixture
def call_next(mocker: MockerFixture, downstream_response: Response) -> MockType:
    """Async call_next returning the downstream response.

    Returns:
        MockType: AsyncMock standing in for the next ASGI layer.
    """
    return cast("MockType", mocker.AsyncMock(return_value=downstream_response))


@pytest.fixture
def make_request(mock_request: MockType) -> Callable[..., MockType]:
    """Configure the shared mock request for a method and path.

    Returns:
        Callable: Factory taking method, path and optional headers.
    """

    def _make(
        method: str = "GET",
        path: str = "/api/resources",
        headers: dict[str, str] | None = None,
    ) -> MockType:
        mock_request.method = method
        mock_request.url.path = path
        mock_request.headers = headers or {}
        mock_request.query_params = {}
        return mock_request

    return _make
