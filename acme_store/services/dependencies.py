"""FastAPI dependency wiring for the repositories.

The :class:`Database` handle lives on ``app.state`` for the lifetime of the
process.  Routers only ever see repositories built from it, which keeps them
free of engine and session concerns and lets tests inject their own handle.
"""

from __future__ import annotations

from fastapi import Depends, Request

from acme_store.db.connection import Database
from acme_store.db.repositories import (
    FavoriteRepository,
    ProductRepository,
    UserRepository,
)


def get_database(request: Request) -> Database:
    """Return the storage handle attached to the running application."""

    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database handle is not initialised; was the lifespan run?")
    return database


def get_user_repository(database: Database = Depends(get_database)) -> UserRepository:
    return UserRepository(database)


def get_product_repository(
    database: Database = Depends(get_database),
) -> ProductRepository:
    return ProductRepository(database)


def get_favorite_repository(
    database: Database = Depends(get_database),
) -> FavoriteRepository:
    return FavoriteRepository(database)


__all__ = [
    "get_database",
    "get_favorite_repository",
    "get_product_repository",
    "get_user_repository",
]
