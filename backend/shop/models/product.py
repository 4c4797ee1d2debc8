"""Product ORM — sellable item with optional photo.

Invariants:
    - Always belongs to a Category (category_id FK, RESTRICT on delete)
    - (name, category_id) is unique
    - photo_data is deferred: list/detail queries never load image bytes

Design Decisions:
    - Photo kept in the row (LargeBinary) rather than object storage: one
      request serves it, no extra service to run
    - Float price: matches the storefront's number semantics; money math is
      done in Decimal at checkout (core/checkout.py)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Float, Boolean, DateTime, LargeBinary, ForeignKey,
    UniqueConstraint, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, deferred

from shop.db.base import Base


class Product(Base):
    """Catalog product."""
    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("name", "category_id", name="uq_products_name_category"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    photo_data: Mapped[bytes | None] = deferred(
        mapped_column(LargeBinary, nullable=True),
    )
    photo_content_type: Mapped[str | None] = mapped_column(
        String(100), nullable=True,
    )
    shipping: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    category: Mapped["Category"] = relationship(
        "Category", back_populates="products", lazy="joined",
    )
