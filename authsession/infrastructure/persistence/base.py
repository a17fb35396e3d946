"""Base model and mixins for all database entities.

This module provides:
- BaseModel: Base class for ALL models (provides id, created_at)
- TimestampMixin: Internal mixin that adds updated_at
- BaseMutableModel: Base for mutable models (combines above)

Following hexagonal architecture:
- This is an infrastructure concern (database implementation detail)
- Domain entities are mapped to/from database models by repositories

Timestamps are written by repositories from the injected clock, not by
database defaults, so expiry arithmetic and stored values always agree.

Architecture:
    BaseModel (id, created_at)
        ↑
        ├── BaseMutableModel (+ updated_at via TimestampMixin)
        │   ├── UserModel
        │   ├── RefreshTokenModel
        │   └── PasswordResetTokenModel
        │
        └── OtpModel (overwritten in place, no updated_at)
"""

from datetime import datetime
from typing import Any

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from authsession.infrastructure.persistence.types import UTCDateTime

# SQLite only auto-increments an INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer(), "sqlite")


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Provides common fields that ALL database models need:
    - id: auto-incrementing integer primary key
    - created_at: creation timestamp (UTC)
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        IdType,
        primary_key=True,
        autoincrement=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<{self.__class__.__name__}(id={self.id})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary (for debugging/logging)."""
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class TimestampMixin:
    """Mixin for mutable models that track updates."""

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
    )

    def to_dict(self) -> dict[str, Any]:
        """Extend BaseModel.to_dict() to include updated_at."""
        data: dict[str, Any] = super().to_dict()  # type: ignore[misc]
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for models whose rows are updated after insert."""

    __abstract__ = True
