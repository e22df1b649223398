"""Pytest fixtures for testing."""
from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from core.config import Settings, get_settings
from services.memory_store import InMemoryStore
from services.sql_store import SqlStore
from services.store import Store

API_TOKEN = "test-api-token"


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Make every test read settings fresh from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def sqlite_url(directory: Path) -> str:
    """SQLite database file inside a per-test temp directory."""
    return f"sqlite+aiosqlite:///{directory / 'bookmarks.db'}"


@pytest.fixture
async def sql_store(tmp_path: Path) -> AsyncGenerator[SqlStore]:
    """A SqlStore on a fresh SQLite database with the schema created."""
    store = SqlStore(create_async_engine(sqlite_url(tmp_path)))
    await store.startup()
    try:
        yield store
    finally:
        await store.shutdown()


@pytest.fixture(params=["memory", "database"])
async def store(request: pytest.FixtureRequest, tmp_path: Path) -> AsyncGenerator[Store]:
    """
    Each store backend in turn.

    Tests using this fixture run once against InMemoryStore and once against
    SqlStore, so both backends are held to the same behavior.
    """
    if request.param == "memory":
        yield InMemoryStore()
    else:
        sql = SqlStore(create_async_engine(sqlite_url(tmp_path)))
        await sql.startup()
        try:
            yield sql
        finally:
            await sql.shutdown()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a known API token and no .env file."""
    return Settings(_env_file=None, api_token=API_TOKEN)


async def _make_client(
    store: Store,
    settings: Settings,
    headers: dict[str, str],
) -> AsyncGenerator[AsyncClient]:
    from api.dependencies import get_store  # noqa: PLC0415
    from api.main import app  # noqa: PLC0415

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
            headers=headers,
        ) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def client(store: Store, test_settings: Settings) -> AsyncGenerator[AsyncClient]:
    """Create an authenticated test client with store and settings overrides."""
    async for test_client in _make_client(
        store, test_settings, {"Authorization": f"Bearer {API_TOKEN}"},
    ):
        yield test_client


@pytest.fixture
async def anonymous_client(
    store: Store,
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client that sends no Authorization header."""
    async for test_client in _make_client(store, test_settings, {}):
        yield test_client
