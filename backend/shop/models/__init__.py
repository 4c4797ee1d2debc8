"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from shop.models.user import User  # noqa: F401
from shop.models.category import Category  # noqa: F401
from shop.models.product import Product  # noqa: F401
from shop.models.order import Order, OrderItem  # noqa: F401
