"""Utilities shared by the repository implementations.

Repositories translate driver failures into :class:`StoreError` values.  The
helpers below recover the name of the violated constraint from an
``IntegrityError`` so that each repository can map a specific unique
constraint to its own error kind.
"""

from __future__ import annotations

import re

from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError

from acme_store.db.models import Base
from acme_store.errors import ErrorKind, StoreError

MAX_NAME_LENGTH = 100

# SQLite reports unique violations as "UNIQUE constraint failed: t.a, t.b"
# without naming the constraint.
_SQLITE_UNIQUE_PATTERN = re.compile(r"UNIQUE constraint failed: (?P<columns>[\w., ]+)")


def _sqlite_constraint_name(message: str) -> str | None:
    match = _SQLITE_UNIQUE_PATTERN.search(message)
    if match is None:
        return None

    qualified = [part.strip() for part in match.group("columns").split(",")]
    table_names = {part.split(".", 1)[0] for part in qualified}
    if len(table_names) != 1:
        return None
    columns = {part.split(".", 1)[1] for part in qualified}

    table = Base.metadata.tables.get(table_names.pop())
    if table is None:
        return None
    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint) and {
            column.name for column in constraint.columns
        } == columns:
            return constraint.name
    return None


def constraint_name(exc: IntegrityError) -> str | None:
    """Return the name of the constraint ``exc`` reports, when known."""

    orig = exc.orig
    diag = getattr(orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return name

    # asyncpg style drivers expose the name directly on the error
    name = getattr(orig, "constraint_name", None)
    if name:
        return name

    return _sqlite_constraint_name(str(orig))


def require_text(value: str | None, label: str, *, max_length: int = MAX_NAME_LENGTH) -> str:
    """Validate a required, length-bounded text field."""

    if value is None or not value.strip():
        raise StoreError(ErrorKind.VALIDATION, f"{label} is required")
    if len(value) > max_length:
        raise StoreError(
            ErrorKind.VALIDATION,
            f"{label} must be at most {max_length} characters",
        )
    return value


__all__ = ["MAX_NAME_LENGTH", "constraint_name", "require_text"]
