"""Storage for the user/product favorite relation.

Invariants enforced here (and by the schema underneath):

* a user favorites a given product at most once
  (``favorites_user_id_product_id_key``);
* a favorite can only be deleted through its owner's id.  Deleting another
  user's favorite fails exactly like deleting one that does not exist, so
  callers cannot probe which favorite ids are in use.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from acme_store.db.connection import Database
from acme_store.db.models import Favorite, Product
from acme_store.db.repositories.base import constraint_name
from acme_store.errors import ErrorKind, StoreError
from acme_store.schemas.favorite import Favorite as FavoriteSchema
from acme_store.schemas.favorite import FavoriteWithProduct

logger = logging.getLogger(__name__)

FAVORITE_PAIR_CONSTRAINT = "favorites_user_id_product_id_key"


class FavoriteRepository:
    """Encapsulates SQLAlchemy operations required by the favorites domain."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def create_favorite(
        self, user_id: UUID | None, product_id: UUID | None
    ) -> FavoriteSchema:
        """Insert a favorite linking ``user_id`` to ``product_id``.

        Unknown user or product ids violate a foreign key and surface as
        generic ``STORAGE`` errors.
        """

        if not user_id or not product_id:
            raise StoreError(
                ErrorKind.VALIDATION, "User ID and Product ID are required"
            )

        favorite = Favorite(user_id=user_id, product_id=product_id)
        try:
            async with self._database.session() as session:
                session.add(favorite)
                await session.flush()
                await session.refresh(favorite)
        except IntegrityError as exc:
            if constraint_name(exc) == FAVORITE_PAIR_CONSTRAINT:
                raise StoreError(
                    ErrorKind.DUPLICATE_FAVORITE, "Favorite already exists"
                ) from exc
            raise StoreError(
                ErrorKind.STORAGE, f"Error creating favorite: {exc.orig}"
            ) from exc
        except SQLAlchemyError as exc:
            raise StoreError(ErrorKind.STORAGE, f"Error creating favorite: {exc}") from exc

        return FavoriteSchema.model_validate(favorite)

    async def fetch_favorites(self, user_id: UUID | None) -> list[FavoriteWithProduct]:
        """Return the user's favorites with product names, newest first."""

        if not user_id:
            raise StoreError(ErrorKind.VALIDATION, "User ID is required")

        query = (
            select(
                Favorite.id,
                Favorite.user_id,
                Favorite.product_id,
                Product.name.label("product_name"),
                Favorite.created_at,
            )
            .join(Product, Favorite.product_id == Product.id)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc())
        )
        try:
            async with self._database.session() as session:
                result = await session.execute(query)
                rows = result.all()
        except SQLAlchemyError as exc:
            raise StoreError(ErrorKind.STORAGE, f"Error fetching favorites: {exc}") from exc

        return [FavoriteWithProduct.model_validate(row) for row in rows]

    async def destroy_favorite(
        self, favorite_id: UUID | None, user_id: UUID | None
    ) -> UUID:
        """Delete the favorite owned by ``user_id`` and return its id."""

        if not favorite_id or not user_id:
            raise StoreError(
                ErrorKind.VALIDATION, "Favorite ID and User ID are required"
            )

        statement = delete(Favorite).where(
            Favorite.id == favorite_id,
            Favorite.user_id == user_id,
        )
        try:
            async with self._database.session() as session:
                result = await session.execute(statement)
                deleted = result.rowcount
        except SQLAlchemyError as exc:
            raise StoreError(ErrorKind.STORAGE, f"Error deleting favorite: {exc}") from exc

        if deleted == 0:
            raise StoreError(
                ErrorKind.FAVORITE_NOT_FOUND, "Favorite not found or unauthorized"
            )

        logger.debug("Deleted favorite %s for user %s", favorite_id, user_id)
        return favorite_id


__all__ = ["FAVORITE_PAIR_CONSTRAINT", "FavoriteRepository"]
