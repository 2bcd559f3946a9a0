"""Domain errors raised by the storage layer."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Categories a store failure can fall into."""

    VALIDATION = "validation"
    DUPLICATE_USERNAME = "duplicate_username"
    DUPLICATE_PRODUCT_NAME = "duplicate_product_name"
    DUPLICATE_FAVORITE = "duplicate_favorite"
    FAVORITE_NOT_FOUND = "favorite_not_found"
    STORAGE = "storage"


class StoreError(Exception):
    """Failure raised by a repository, tagged with an :class:`ErrorKind`.

    Callers branch on ``kind``; ``message`` is for humans only.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"StoreError(kind={self.kind.value!r}, message={self.message!r})"


class SchemaError(RuntimeError):
    """Raised when the schema cannot be (re)created. Fatal at startup."""


__all__ = ["ErrorKind", "SchemaError", "StoreError"]
