"""Shared fixtures for integration tests.

Every client talks to a freshly created application whose superhero store
starts from the seed records, so tests can mutate the collection freely.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable, Generator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from loguru import logger

from superhero_api.api.main import create_app
from superhero_api.core.config import Settings, get_settings
from superhero_api.core.context import RequestContext
from superhero_api.core.logging import _state
from superhero_api.infrastructure.storage import SuperheroStore, get_superhero_store

SettingsClientFactoryType = Callable[[Settings], Awaitable[AsyncClient]]


def build_app(store: SuperheroStore, settings: Settings | None = None) -> FastAPI:
    app = create_app(settings)
    app.dependency_overrides[get_superhero_store] = lambda: store
    if settings is not None:
        app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest.fixture
def store() -> SuperheroStore:
    """Provide the store backing the test client."""
    return SuperheroStore()


@pytest.fixture
def app(store: SuperheroStore) -> FastAPI:
    """Create an application bound to the test store."""
    return build_app(store)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create test client for the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def client_with_settings(
    store: SuperheroStore,
) -> AsyncGenerator[SettingsClientFactoryType]:
    """Factory fixture for creating test clients with custom settings.

    Usage:
        async def test_something(client_with_settings):
            client = await client_with_settings(Settings(docs_url=None))
    """
    clients: list[AsyncClient] = []

    async def _create_client(settings: Settings) -> AsyncClient:
        transport = ASGITransport(
            app=build_app(store, settings), raise_app_exceptions=False
        )
        client = AsyncClient(transport=transport, base_url="http://test")
        clients.append(client)
        return client

    yield _create_client

    for client in clients:
        await client.aclose()


@pytest.fixture(autouse=True)
def clear_caches() -> Generator[None]:
    """Clear the settings and store caches before and after each test."""
    get_settings.cache_clear()
    get_superhero_store.cache_clear()
    yield
    get_settings.cache_clear()
    get_superhero_store.cache_clear()


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    """Clear the request context before and after each test."""
    RequestContext.clear()
    yield
    RequestContext.clear()


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None]:
    """Keep app creation from reconfiguring logging and silence log output."""
    logger.remove()
    _state.configured = True
    yield
    _state.configured = True
    logger.remove()
