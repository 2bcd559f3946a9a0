"""SQLAlchemy ORM models for users, products, and their favorites."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint, Uuid
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utcnow() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)



class UTCDateTime(TypeDecorator):
    """Timezone-aware timestamp that always loads as UTC.

    SQLite drops the offset on storage, so naive values read back are
    tagged as UTC; aware values are converted to UTC before they are bound.
    """

    impl = DateTime
    cache_ok = True

    def __init__(self) -> None:
        super().__init__(timezone=True)

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("username", name="users_username_key"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="bcrypt hash of the password. The plaintext is never stored.",
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )

    favorites: Mapped[list[Favorite]] = relationship(
        "Favorite",
        back_populates="user",
        cascade="all, delete",
        passive_deletes=True,
    )


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (UniqueConstraint("name", name="products_name_key"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )

    favorites: Mapped[list[Favorite]] = relationship(
        "Favorite",
        back_populates="product",
        cascade="all, delete",
        passive_deletes=True,
    )


class Favorite(Base):
    """Association row linking one user to one product."""

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "product_id",
            name="favorites_user_id_product_id_key",
        ),
        Index("idx_favorites_user_id", "user_id"),
        Index("idx_favorites_product_id", "product_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow
    )

    user: Mapped[User] = relationship("User", back_populates="favorites")
    product: Mapped[Product] = relationship("Product", back_populates="favorites")


__all__ = ["Base", "Favorite", "Product", "UTCDateTime", "User", "utcnow"]
