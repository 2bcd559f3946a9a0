"""Demo catalog loaded after a schema reset."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from acme_store.db.connection import Database
from acme_store.db.repositories import (
    FavoriteRepository,
    ProductRepository,
    UserRepository,
)
from acme_store.schemas import Favorite, Product, User

logger = logging.getLogger(__name__)

DEMO_PRODUCTS: tuple[str, ...] = ("cleats", "bats", "gloves", "helmets")
DEMO_USERS: tuple[tuple[str, str], ...] = (
    ("dave", "Mr3000"),
    ("bill", "deepballs"),
    ("jessica", "bigpimpin"),
)
# (username, product name)
DEMO_FAVORITES: tuple[tuple[str, str], ...] = (
    ("dave", "gloves"),
    ("bill", "bats"),
    ("jessica", "gloves"),
)


@dataclass
class SeedResult:
    products: dict[str, Product] = field(default_factory=dict)
    users: dict[str, User] = field(default_factory=dict)
    favorites: list[Favorite] = field(default_factory=list)


async def seed_demo_data(database: Database) -> SeedResult:
    """Insert the demo products, users, and favorites.

    Expects empty tables; a second run fails with duplicate errors.
    """

    products = ProductRepository(database)
    users = UserRepository(database)
    favorites = FavoriteRepository(database)
    result = SeedResult()

    for name in DEMO_PRODUCTS:
        result.products[name] = await products.create_product(name)

    for username, password in DEMO_USERS:
        result.users[username] = await users.create_user(username, password)

    for username, product_name in DEMO_FAVORITES:
        result.favorites.append(
            await favorites.create_favorite(
                result.users[username].id, result.products[product_name].id
            )
        )

    logger.info(
        "Seeded %d products, %d users, %d favorites",
        len(result.products),
        len(result.users),
        len(result.favorites),
    )
    return result


__all__ = [
    "DEMO_FAVORITES",
    "DEMO_PRODUCTS",
    "DEMO_USERS",
    "SeedResult",
    "seed_demo_data",
]
