"""FastAPI router for user registration and listing."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from acme_store.db.repositories import UserRepository
from acme_store.schemas.user import User, UserCreate
from acme_store.services.dependencies import get_user_repository

router = APIRouter()


@router.get("", response_model=list[User])
async def list_users(
    repository: UserRepository = Depends(get_user_repository),
) -> list[User]:
    """Return every user, newest first. Password hashes are never included."""

    return await repository.fetch_users()


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    repository: UserRepository = Depends(get_user_repository),
) -> User:
    return await repository.create_user(payload.username, payload.password)
