"""Fixture for running store tests against a throwaway PostgreSQL schema.

The suite only runs when ``TEST_DATABASE_URL`` points at a reachable
PostgreSQL server; otherwise every test using ``postgres_schema`` is skipped.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import pytest
from sqlalchemy import schema as sa_schema
from sqlalchemy.engine import URL
from sqlalchemy.engine import create_engine as create_sync_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import OperationalError

from acme_store.db.connection import Database
from acme_store.settings import normalize_database_url


@dataclass(frozen=True)
class TemporaryPostgresSchema:
    """A PostgreSQL schema dedicated to a single test."""

    name: str
    url: URL

    @property
    def sqlalchemy_url(self) -> str:
        return self.url.render_as_string(hide_password=False)

    def database(self) -> Database:
        """Build a storage handle whose connections use this schema."""

        return Database.from_url(self.sqlalchemy_url, pool_size=2, max_overflow=0)


def _base_url() -> URL:
    raw_url = os.getenv("TEST_DATABASE_URL")
    if not raw_url:
        pytest.skip("TEST_DATABASE_URL is not set; skipping PostgreSQL tests")
    pytest.importorskip("psycopg")
    url = make_url(normalize_database_url(raw_url))
    if url.get_backend_name() != "postgresql":
        pytest.skip("TEST_DATABASE_URL must point at PostgreSQL")
    return url


def _url_with_schema(base: URL, schema_name: str) -> URL:
    """Embed ``schema_name`` into the URL via ``search_path`` options."""

    query: dict[str, Any] = dict(base.query)
    search_path_clause = f"-csearch_path={schema_name}"
    if "options" in query:
        query["options"] = f"{query['options']} {search_path_clause}".strip()
    else:
        query["options"] = search_path_clause
    return base.set(query=query)


@pytest.fixture()
def postgres_schema() -> Iterator[TemporaryPostgresSchema]:
    """Yield a PostgreSQL schema that is dropped after the test completes."""

    base = _base_url()
    schema_name = f"test_{uuid.uuid4().hex}"
    admin_engine = create_sync_engine(base.set(drivername="postgresql+psycopg"))

    try:
        with admin_engine.begin() as connection:
            connection.execute(sa_schema.CreateSchema(schema_name))
    except OperationalError as exc:
        admin_engine.dispose()
        pytest.skip(f"PostgreSQL is unreachable: {exc}")

    try:
        yield TemporaryPostgresSchema(
            name=schema_name, url=_url_with_schema(base, schema_name)
        )
    finally:
        with admin_engine.begin() as connection:
            connection.execute(sa_schema.DropSchema(schema_name, cascade=True))
        admin_engine.dispose()
