"""Shared fixtures for integration tests.

Clients talk to a fully assembled application (middleware, exception
handlers, routers) through ``httpx.ASGITransport``; only the resource store
is swapped per test.
"""

from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.api.main import create_app
from src.core.config import Settings
from src.domain.resource import Resource, ResourceStore
from src.infrastructure.catalog import BaseResourceStore, InMemoryResourceStore

type ClientFactory = Callable[[ResourceStore], AbstractAsyncContextManager[AsyncClient]]


class UnavailableStore(BaseResourceStore):
    """Store whose backend is down, counting close calls."""

    name = "unavailable"

    def __init__(self) -> None:
        self.closed = 0

    async def _load(self) -> list[Resource]:
        raise ConnectionError("catalog backend 10.1.2.3:5432 refused connection")

    async def close(self) -> None:
        self.closed += 1


@pytest.fixture
def test_settings() -> Settings:
    """Settings for integration tests, built from the cleaned environment."""
    return Settings()


@pytest.fixture
def build_app(test_settings: Settings) -> Callable[[ResourceStore], FastAPI]:
    """Factory creating an application around a given store."""

    def _build(store: ResourceStore) -> FastAPI:
        return create_app(settings=test_settings, store=store)

    return _build


@pytest.fixture
def make_client(build_app: Callable[[ResourceStore], FastAPI]) -> ClientFactory:
    """Factory yielding an HTTP client bound to an app around the store.

    Unhandled exceptions are rendered by the app's handlers instead of being
    re-raised into the test.
    """

    @asynccontextmanager
    async def _client(store: ResourceStore) -> AsyncGenerator[AsyncClient]:
        transport = ASGITransport(app=build_app(store), raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

    return _client


@pytest.fixture
async def client(
    make_client: ClientFactory, sample_resources: list[Resource]
) -> AsyncGenerator[AsyncClient]:
    """Client for an app serving the sample catalog."""
    async with make_client(InMemoryResourceStore(sample_resources)) as ac:
        yield ac


@pytest.fixture
async def empty_client(make_client: ClientFactory) -> AsyncGenerator[AsyncClient]:
    """Client for an app serving an empty catalog."""
    async with make_client(InMemoryResourceStore()) as ac:
        yield ac


@pytest.fixture
def unavailable_store() -> UnavailableStore:
    """A store that fails every read."""
    return UnavailableStore()


@pytest.fixture
async def failing_client(
    make_client: ClientFactory, unavailable_store: UnavailableStore
) -> AsyncGenerator[AsyncClient]:
    """Client for an app whose store fails every read."""
    async with make_client(unavailable_store) as ac:
        yield ac
