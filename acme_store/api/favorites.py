"""FastAPI router exposing a user's favorite products.

Domain failures raised by :class:`FavoriteRepository` propagate as
:class:`~acme_store.errors.StoreError` and are mapped to status codes by the
application's exception handler.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from acme_store.db.repositories import FavoriteRepository
from acme_store.schemas.favorite import Favorite, FavoriteCreate, FavoriteWithProduct
from acme_store.services.dependencies import get_favorite_repository

router = APIRouter()


@router.get("/{user_id}/favorites", response_model=list[FavoriteWithProduct])
async def list_favorites(
    user_id: UUID,
    repository: FavoriteRepository = Depends(get_favorite_repository),
) -> list[FavoriteWithProduct]:
    """Return the user's favorites, newest first; 404 when there are none."""

    favorites = await repository.fetch_favorites(user_id)
    if not favorites:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No favorites found for this user",
        )
    return favorites


@router.post(
    "/{user_id}/favorites",
    response_model=Favorite,
    status_code=status.HTTP_201_CREATED,
)
async def create_favorite(
    user_id: UUID,
    payload: FavoriteCreate,
    repository: FavoriteRepository = Depends(get_favorite_repository),
) -> Favorite:
    return await repository.create_favorite(user_id, payload.product_id)


@router.delete(
    "/{user_id}/favorites/{favorite_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_favorite(
    user_id: UUID,
    favorite_id: UUID,
    repository: FavoriteRepository = Depends(get_favorite_repository),
) -> Response:
    """Remove one of the user's favorites."""

    await repository.destroy_favorite(favorite_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
