"""Pydantic schemas for user registration and listing."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Payload for registering a user."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(
        ...,
        min_length=1,
        description="Plaintext password. Only its bcrypt hash is stored.",
    )


class User(BaseModel):
    """Read model exposed in API responses. Never carries the password."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    created_at: datetime
