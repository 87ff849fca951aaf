"""
Tenistas API — Raqueta SQLAlchemy Model
=========================================

What:  ORM model representing the `raquetas` table.
Why:   One entity class for both repositories: the SQL repository persists it,
       the in-memory repository keeps transient (session-less) instances.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Created only by repository create paths; mutated only by update paths.

Table Design:
    - Integer primary key: server-assigned, never taken from the client
    - external_id: UUID4 assigned at creation, unique, used by /find/{externalId}
    - price: FLOAT, non-negative (checked at the API boundary)
    - created_at / updated_at: UTC; equal at creation, updated_at bumped on update
    - deleted: soft-delete marker, stored but not applied to reads
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String, TypeDecorator, Uuid, false
from sqlalchemy.orm import Mapped, mapped_column

from tenistas.database import Base

# Column widths; the request validator enforces the same limits
BRAND_MAX_LENGTH = 100
MODEL_MAX_LENGTH = 100
IMAGE_REF_MAX_LENGTH = 255


def utcnow() -> datetime:
    """Timezone-aware current time; all timestamps are stored in UTC."""
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    DateTime(timezone=True) that always reads back timezone-aware UTC.

    SQLite has no timezone support and returns naive values; PostgreSQL
    returns aware ones in the session time zone. Both are normalised to
    UTC so a stored racket serialises exactly as it did when created.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Raqueta(Base):
    """
    A tennis racket record.

    Lifecycle:
        1. Built by the mapper from a request (id, external_id and timestamps unset)
        2. Created by a repository: id, external_id, created_at == updated_at assigned
        3. Updated: only model, price, image_ref and updated_at change
        4. Hard-deleted by id; the deleted flag does not take part
    """

    __tablename__ = "raquetas"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    external_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        unique=True,
        index=True,
        default=uuid.uuid4,
    )

    brand: Mapped[str] = mapped_column(String(BRAND_MAX_LENGTH), nullable=False)
    model: Mapped[str] = mapped_column(String(MODEL_MAX_LENGTH), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)

    # No integrity checking: may be an URL, a relative path, or nothing
    image_ref: Mapped[Optional[str]] = mapped_column(String(IMAGE_REF_MAX_LENGTH), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )

    deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    def copy(self) -> "Raqueta":
        """Detached copy with the same column values."""
        return Raqueta(
            id=self.id,
            external_id=self.external_id,
            brand=self.brand,
            model=self.model,
            price=self.price,
            image_ref=self.image_ref,
            created_at=self.created_at,
            updated_at=self.updated_at,
            deleted=self.deleted,
        )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return (
            f"<Raqueta(id={self.id}, brand='{self.brand}', "
            f"model='{self.model}', price={self.price})>"
        )
