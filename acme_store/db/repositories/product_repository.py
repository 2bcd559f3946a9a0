"""Catalog storage: product creation and listing."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from acme_store.db.connection import Database
from acme_store.db.models import Product
from acme_store.db.repositories.base import constraint_name, require_text
from acme_store.errors import ErrorKind, StoreError
from acme_store.schemas.product import Product as ProductSchema

PRODUCT_NAME_CONSTRAINT = "products_name_key"


class ProductRepository:
    def __init__(self, database: Database) -> None:
        self._database = database

    async def create_product(self, name: str) -> ProductSchema:
        require_text(name, "Product name")

        product = Product(name=name)
        try:
            async with self._database.session() as session:
                session.add(product)
                await session.flush()
                await session.refresh(product)
        except IntegrityError as exc:
            if constraint_name(exc) == PRODUCT_NAME_CONSTRAINT:
                raise StoreError(
                    ErrorKind.DUPLICATE_PRODUCT_NAME, "Product name already exists"
                ) from exc
            raise StoreError(
                ErrorKind.STORAGE, f"Error creating product: {exc.orig}"
            ) from exc
        except SQLAlchemyError as exc:
            raise StoreError(ErrorKind.STORAGE, f"Error creating product: {exc}") from exc

        return ProductSchema.model_validate(product)

    async def fetch_products(self) -> list[ProductSchema]:
        query = select(Product).order_by(Product.created_at.desc())
        try:
            async with self._database.session() as session:
                result = await session.execute(query)
                products = result.scalars().all()
        except SQLAlchemyError as exc:
            raise StoreError(ErrorKind.STORAGE, f"Error fetching products: {exc}") from exc

        return [ProductSchema.model_validate(product) for product in products]


__all__ = ["PRODUCT_NAME_CONSTRAINT", "ProductRepository"]
