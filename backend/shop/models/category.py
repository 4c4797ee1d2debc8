"""Category ORM — product grouping shown in the storefront menu.

Invariants:
    - name and slug are both unique
    - slug is stored lowercase
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from shop.db.base import Base


class Category(Base):
    """Product category."""
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(
        String(220), nullable=False, unique=True, index=True,
    )

    products: Mapped[list["Product"]] = relationship(
        "Product", back_populates="category", passive_deletes=True,
    )

    @validates("slug")
    def _lowercase_slug(self, key, value):
        return value.lower() if isinstance(value, str) else value
