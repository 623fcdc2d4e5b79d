"""Shared fixtures: a throwaway SQLite record store and an app bound to it."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from practice_log.config import Settings
from practice_log.infrastructure.database import StorageConnector
from practice_log.main import create_app


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'practice_log.db'}"


@pytest.fixture
def settings(database_url: str) -> Settings:
    return Settings(
        _env_file=None,
        database_url=database_url,
        database_name="",
        app_env="test",
        eager_connect=False,
    )


@pytest_asyncio.fixture
async def connector(database_url: str) -> AsyncIterator[StorageConnector]:
    store = StorageConnector(database_url)
    await store.connect()
    yield store
    await store.disconnect()


@pytest_asyncio.fixture
async def client(settings: Settings) -> AsyncIterator[AsyncClient]:
    app = create_app(settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    await app.state.connector.disconnect()
