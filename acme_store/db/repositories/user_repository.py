"""Credential storage: user registration and listing."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from acme_store.db.connection import Database
from acme_store.db.models import User
from acme_store.db.repositories.base import constraint_name, require_text
from acme_store.errors import ErrorKind, StoreError
from acme_store.schemas.user import User as UserSchema
from acme_store.security import hash_password

logger = logging.getLogger(__name__)

USERNAME_CONSTRAINT = "users_username_key"

# bcrypt only looks at the first 72 bytes of the secret.
MAX_PASSWORD_BYTES = 72


class UserRepository:
    """Creates and lists users. Passwords are stored as bcrypt hashes only."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def create_user(self, username: str, password: str) -> UserSchema:
        if not username or not password:
            raise StoreError(ErrorKind.VALIDATION, "Username and password are required")
        require_text(username, "Username")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise StoreError(
                ErrorKind.VALIDATION,
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
            )

        # bcrypt is CPU bound; keep it off the event loop.
        password_hash = await asyncio.to_thread(hash_password, password)
        user = User(username=username, password=password_hash)
        try:
            async with self._database.session() as session:
                session.add(user)
                await session.flush()
                await session.refresh(user)
        except IntegrityError as exc:
            if constraint_name(exc) == USERNAME_CONSTRAINT:
                raise StoreError(
                    ErrorKind.DUPLICATE_USERNAME, "Username already exists"
                ) from exc
            raise StoreError(ErrorKind.STORAGE, f"Error creating user: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            raise StoreError(ErrorKind.STORAGE, f"Error creating user: {exc}") from exc

        logger.debug("Created user %s", user.id)
        return UserSchema.model_validate(user)

    async def fetch_users(self) -> list[UserSchema]:
        query = select(User.id, User.username, User.created_at).order_by(
            User.created_at.desc()
        )
        try:
            async with self._database.session() as session:
                result = await session.execute(query)
                rows = result.all()
        except SQLAlchemyError as exc:
            raise StoreError(ErrorKind.STORAGE, f"Error fetching users: {exc}") from exc

        return [UserSchema.model_validate(row) for row in rows]


__all__ = ["MAX_PASSWORD_BYTES", "USERNAME_CONSTRAINT", "UserRepository"]
