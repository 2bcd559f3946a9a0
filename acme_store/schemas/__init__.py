"""Pydantic schemas shared by the API layer and repositories."""

from .favorite import Favorite, FavoriteCreate, FavoriteWithProduct
from .product import Product, ProductCreate
from .user import User, UserCreate

__all__ = [
    "Favorite",
    "FavoriteCreate",
    "FavoriteWithProduct",
    "Product",
    "ProductCreate",
    "User",
    "UserCreate",
]
