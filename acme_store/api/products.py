"""FastAPI router for the product catalog."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from acme_store.db.repositories import ProductRepository
from acme_store.schemas.product import Product, ProductCreate
from acme_store.services.dependencies import get_product_repository

router = APIRouter()


@router.get("", response_model=list[Product])
async def list_products(
    repository: ProductRepository = Depends(get_product_repository),
) -> list[Product]:
    return await repository.fetch_products()


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductCreate,
    repository: ProductRepository = Depends(get_product_repository),
) -> Product:
    return await repository.create_product(payload.name)
