"""Pydantic schemas that power the favorites API surface."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FavoriteCreate(BaseModel):
    """Body of ``POST /api/users/{id}/favorites``."""

    product_id: UUID = Field(..., description="Primary key from the products table")


class Favorite(BaseModel):
    """A stored favorite row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    product_id: UUID
    created_at: datetime


class FavoriteWithProduct(Favorite):
    """Favorite joined with the name of the referenced product."""

    product_name: str
