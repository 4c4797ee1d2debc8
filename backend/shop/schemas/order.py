"""Order & Checkout Schemas.

Invariants:
    - OrderStatusUpdate.status must be an OrderStatus wire value
    - CartLine identifies a product by "_id" (storefront contract); any other
      product fields the storefront sends along are ignored, including price
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shop.core.domain_types import OrderStatus


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class CartLine(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    product_id: UUID = Field(alias="_id")


class PaymentRequest(BaseModel):
    nonce: str | None = Field(None, max_length=4096)
    cart: list[CartLine] | None = Field(None, max_length=500)
