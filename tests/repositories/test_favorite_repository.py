"""Tests for the favorite relation: uniqueness, ownership, and cascades."""

from __future__ import annotations

import uuid

import pytest
import pytest_asyncio
from sqlalchemy import delete, func, select

from acme_store.db.connection import Database
from acme_store.db.models import Favorite, Product, User
from acme_store.db.repositories import (
    FavoriteRepository,
    ProductRepository,
    UserRepository,
)
from acme_store.errors import ErrorKind, StoreError
from acme_store.schemas import Product as ProductSchema
from acme_store.schemas import User as UserSchema


async def _favorite_count(database: Database) -> int:
    async with database.session() as session:
        result = await session.execute(select(func.count()).select_from(Favorite))
        return result.scalar_one()


@pytest_asyncio.fixture
async def catalog(
    users: UserRepository, products: ProductRepository
) -> tuple[dict[str, UserSchema], dict[str, ProductSchema]]:
    created_users = {
        name: await users.create_user(name, "secret") for name in ("dave", "bill")
    }
    created_products = {
        name: await products.create_product(name) for name in ("bats", "gloves", "cleats")
    }
    return created_users, created_products


@pytest.mark.asyncio
async def test_create_favorite_links_user_and_product(
    favorites: FavoriteRepository, catalog
) -> None:
    users, products = catalog

    favorite = await favorites.create_favorite(users["bill"].id, products["bats"].id)

    assert favorite.user_id == users["bill"].id
    assert favorite.product_id == products["bats"].id
    assert favorite.created_at is not None


@pytest.mark.asyncio
async def test_duplicate_favorite_leaves_single_row(
    favorites: FavoriteRepository, database: Database, catalog
) -> None:
    users, products = catalog
    await favorites.create_favorite(users["bill"].id, products["bats"].id)

    with pytest.raises(StoreError) as excinfo:
        await favorites.create_favorite(users["bill"].id, products["bats"].id)

    assert excinfo.value.kind is ErrorKind.DUPLICATE_FAVORITE
    assert await _favorite_count(database) == 1


@pytest.mark.asyncio
async def test_same_product_can_be_favorited_by_different_users(
    favorites: FavoriteRepository, database: Database, catalog
) -> None:
    users, products = catalog

    await favorites.create_favorite(users["dave"].id, products["gloves"].id)
    await favorites.create_favorite(users["bill"].id, products["gloves"].id)

    assert await _favorite_count(database) == 2


@pytest.mark.asyncio
async def test_unknown_product_is_a_storage_error(
    favorites: FavoriteRepository, catalog
) -> None:
    users, _ = catalog

    with pytest.raises(StoreError) as excinfo:
        await favorites.create_favorite(users["bill"].id, uuid.uuid4())

    assert excinfo.value.kind is ErrorKind.STORAGE


@pytest.mark.asyncio
async def test_create_favorite_requires_both_ids(favorites: FavoriteRepository) -> None:
    with pytest.raises(StoreError) as excinfo:
        await favorites.create_favorite(None, uuid.uuid4())

    assert excinfo.value.kind is ErrorKind.VALIDATION


@pytest.mark.asyncio
async def test_fetch_favorites_returns_only_owned_rows_newest_first(
    favorites: FavoriteRepository, catalog
) -> None:
    users, products = catalog
    for name in ("cleats", "bats", "gloves"):
        await favorites.create_favorite(users["dave"].id, products[name].id)
    await favorites.create_favorite(users["bill"].id, products["bats"].id)

    listed = await favorites.fetch_favorites(users["dave"].id)

    assert [item.product_name for item in listed] == ["gloves", "bats", "cleats"]
    assert {item.user_id for item in listed} == {users["dave"].id}


@pytest.mark.asyncio
async def test_fetch_favorites_is_empty_for_user_without_any(
    favorites: FavoriteRepository, catalog
) -> None:
    users, _ = catalog

    assert await favorites.fetch_favorites(users["bill"].id) == []
    assert await favorites.fetch_favorites(uuid.uuid4()) == []


@pytest.mark.asyncio
async def test_destroy_favorite_removes_owned_row(
    favorites: FavoriteRepository, database: Database, catalog
) -> None:
    users, products = catalog
    favorite = await favorites.create_favorite(users["bill"].id, products["bats"].id)

    deleted_id = await favorites.destroy_favorite(favorite.id, users["bill"].id)

    assert deleted_id == favorite.id
    assert await _favorite_count(database) == 0


@pytest.mark.asyncio
async def test_destroy_foreign_favorite_fails_like_missing_one(
    favorites: FavoriteRepository, database: Database, catalog
) -> None:
    users, products = catalog
    daves = await favorites.create_favorite(users["dave"].id, products["gloves"].id)

    with pytest.raises(StoreError) as foreign:
        await favorites.destroy_favorite(daves.id, users["bill"].id)
    with pytest.raises(StoreError) as missing:
        await favorites.destroy_favorite(uuid.uuid4(), users["bill"].id)

    assert foreign.value.kind is missing.value.kind is ErrorKind.FAVORITE_NOT_FOUND
    assert foreign.value.message == missing.value.message
    assert await _favorite_count(database) == 1


@pytest.mark.asyncio
async def test_deleting_user_cascades_to_favorites(
    favorites: FavoriteRepository, database: Database, catalog
) -> None:
    users, products = catalog
    await favorites.create_favorite(users["bill"].id, products["bats"].id)
    await favorites.create_favorite(users["bill"].id, products["gloves"].id)
    await favorites.create_favorite(users["dave"].id, products["gloves"].id)

    async with database.session() as session:
        await session.execute(delete(User).where(User.id == users["bill"].id))

    assert await _favorite_count(database) == 1
    assert await favorites.fetch_favorites(users["bill"].id) == []
    assert len(await favorites.fetch_favorites(users["dave"].id)) == 1


@pytest.mark.asyncio
async def test_deleting_product_cascades_to_favorites(
    favorites: FavoriteRepository, database: Database, catalog
) -> None:
    users, products = catalog
    await favorites.create_favorite(users["bill"].id, products["gloves"].id)
    await favorites.create_favorite(users["dave"].id, products["gloves"].id)
    await favorites.create_favorite(users["dave"].id, products["bats"].id)

    async with database.session() as session:
        await session.execute(delete(Product).where(Product.id == products["gloves"].id))

    assert await _favorite_count(database) == 1
    remaining = await favorites.fetch_favorites(users["dave"].id)
    assert [item.product_name for item in remaining] == ["bats"]
