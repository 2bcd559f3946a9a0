"""Schema bootstrap for the users, products, and favorites tables.

``reset_schema`` is destructive: it drops every table it owns before
recreating them, discarding all stored rows.  Startup only calls it when
``RESET_SCHEMA`` is enabled; otherwise ``ensure_schema`` creates whatever is
missing and leaves existing data alone.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from acme_store.db.connection import Database
from acme_store.db.models import Base
from acme_store.errors import SchemaError

logger = logging.getLogger(__name__)


def _drop_and_create(sync_connection) -> None:
    Base.metadata.drop_all(sync_connection, checkfirst=True)
    Base.metadata.create_all(sync_connection, checkfirst=False)


async def reset_schema(database: Database) -> None:
    """Drop and recreate all tables and indexes in a single transaction."""

    try:
        async with database.transaction() as connection:
            await connection.run_sync(_drop_and_create)
    except SQLAlchemyError as exc:
        raise SchemaError(f"Error creating tables: {exc}") from exc

    logger.info("Schema reset: %s", ", ".join(Base.metadata.tables))


async def ensure_schema(database: Database) -> None:
    """Create missing tables and indexes without touching existing ones."""

    try:
        async with database.transaction() as connection:
            await connection.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as exc:
        raise SchemaError(f"Error creating tables: {exc}") from exc


__all__ = ["ensure_schema", "reset_schema"]
