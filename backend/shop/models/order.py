"""Order ORM — a paid checkout and its purchased lines.

Invariants:
    - buyer_id references the paying user
    - payment stores the gateway result (SaleResult.to_payment_record())
    - status is one of OrderStatus values, default "Not Process"
    - items keep their position so the order lists products in cart order

Design Decisions:
    - OrderItem keeps product_id (SET NULL on product delete) AND a name/price
      snapshot: live product data is shown while the product exists, the
      snapshot afterwards, so order history survives catalog changes
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Integer, Float, DateTime, JSON, ForeignKey, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shop.core.domain_types import OrderStatus
from shop.db.base import Base


class Order(Base):
    """Order aggregate root."""
    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    buyer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        index=True,
    )
    payment: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrderStatus.NOT_PROCESSED.value,
    )
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

    buyer: Mapped["User"] = relationship(
        "User", back_populates="orders", lazy="joined",
    )
    items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem", back_populates="order",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="OrderItem.position",
    )


class OrderItem(Base):
    """One purchased unit of a product."""
    __tablename__ = "order_items"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    order_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False,
    )
    product_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="SET NULL"), nullable=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)

    order: Mapped["Order"] = relationship("Order", back_populates="items")
    product: Mapped["Product | None"] = relationship(
        "Product", lazy="selectin",
    )
