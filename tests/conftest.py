"""Shared fixtures: a throwaway SQLite database, repositories, and an API client."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from acme_store.db.connection import Database
from acme_store.db.repositories import (
    FavoriteRepository,
    ProductRepository,
    UserRepository,
)
from acme_store.db.schema import reset_schema
from acme_store.main import create_app
from acme_store.settings import AppSettings


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """File-backed SQLite URL so every pooled connection sees the same data."""

    return f"sqlite+aiosqlite:///{tmp_path / 'acme_store.db'}"


@pytest_asyncio.fixture
async def database(sqlite_url: str) -> AsyncIterator[Database]:
    """Provide a freshly reset database handle."""

    handle = Database.from_url(sqlite_url)
    await reset_schema(handle)
    try:
        yield handle
    finally:
        await handle.dispose()


@pytest.fixture
def users(database: Database) -> UserRepository:
    return UserRepository(database)


@pytest.fixture
def products(database: Database) -> ProductRepository:
    return ProductRepository(database)


@pytest.fixture
def favorites(database: Database) -> FavoriteRepository:
    return FavoriteRepository(database)


@pytest_asyncio.fixture
async def api_client(
    database: Database, sqlite_url: str
) -> AsyncIterator[AsyncClient]:
    """Create an ``AsyncClient`` bound to an app that uses ``database``."""

    app = create_app(settings=AppSettings(DATABASE_URL=sqlite_url), database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
