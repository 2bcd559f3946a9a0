"""Tests for the ``reset_db`` command-line entry point."""

from __future__ import annotations

import pytest

from acme_store.db.connection import Database
from acme_store.db.repositories import ProductRepository, UserRepository
from acme_store.scripts import reset_db


@pytest.mark.asyncio
async def test_reset_requires_confirmation(
    database: Database, sqlite_url: str, capsys: pytest.CaptureFixture[str]
) -> None:
    await ProductRepository(database).create_product("bats")

    exit_code = await reset_db.main(["--database-url", sqlite_url])

    assert exit_code == 2
    assert "--yes" in capsys.readouterr().err
    assert len(await ProductRepository(database).fetch_products()) == 1


@pytest.mark.asyncio
async def test_reset_with_seed_replaces_data(database: Database, sqlite_url: str) -> None:
    await UserRepository(database).create_user("someone", "secret")

    exit_code = await reset_db.main(["--database-url", sqlite_url, "--yes", "--seed"])

    assert exit_code == 0
    usernames = {user.username for user in await UserRepository(database).fetch_users()}
    assert usernames == {"dave", "bill", "jessica"}


@pytest.mark.asyncio
async def test_reset_reports_schema_failure(
    tmp_path, capsys: pytest.CaptureFixture[str]
) -> None:
    url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'store.db'}"

    exit_code = await reset_db.main(["--database-url", url, "--yes"])

    assert exit_code == 1
    assert "Error creating tables" in capsys.readouterr().err
