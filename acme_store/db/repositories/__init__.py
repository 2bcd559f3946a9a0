"""Repositories wrapping the three store tables."""

from .favorite_repository import FavoriteRepository
from .product_repository import ProductRepository
from .user_repository import UserRepository

__all__ = ["FavoriteRepository", "ProductRepository", "UserRepository"]
