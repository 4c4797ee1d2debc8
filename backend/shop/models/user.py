"""User ORM — registered customers and administrators.

Invariants:
    - email is unique
    - password holds a bcrypt hash, never plain text
    - role: 0 = customer, 1 = admin (core/domain_types.Role)
    - answer is the security answer used by forgot-password
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from shop.core.domain_types import Role
from shop.db.base import Base


class User(Base):
    """Shop account."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[int] = mapped_column(
        Integer, nullable=False, default=int(Role.USER),
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

    orders: Mapped[list["Order"]] = relationship(
        "Order", back_populates="buyer",
    )

    @validates("name")
    def _trim_name(self, key, value):
        return value.strip() if isinstance(value, str) else value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
