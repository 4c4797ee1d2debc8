"""Order Service — order creation after payment, buyer history, admin status updates.

Invariants:
    - An order is only created from a successful SaleResult
    - Order lines preserve cart order (position) and snapshot name/price
    - Buyers only ever see their own orders
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shop.core.domain_types import OrderStatus
from shop.core.errors import ResourceNotFoundError
from shop.infrastructure.payment_gateway import SaleResult
from shop.models.order import Order, OrderItem
from shop.models.product import Product

logger = logging.getLogger(__name__)


async def get_order(db: AsyncSession, order_id: UUID) -> Order:
    result = await db.execute(
        select(Order).where(Order.id == order_id)
        .execution_options(populate_existing=True),
    )
    order = result.scalar_one_or_none()
    if not order:
        raise ResourceNotFoundError("Order", str(order_id), message="Order not found")
    return order


async def create_order(
    db: AsyncSession,
    buyer_id: UUID,
    products: list[Product],
    sale: SaleResult,
) -> Order:
    """Persist a paid order; `products` has one entry per purchased unit."""
    order = Order(
        buyer_id=buyer_id,
        payment=sale.to_payment_record(),
        status=OrderStatus.NOT_PROCESSED.value,
        items=[
            OrderItem(
                product_id=product.id,
                position=position,
                name=product.name,
                price=product.price,
            )
            for position, product in enumerate(products)
        ],
    )
    db.add(order)
    await db.commit()
    logger.info(
        "Order created",
        extra={
            "order_id": order.id, "user_id": buyer_id,
            "transaction_id": sale.transaction_id,
        },
    )
    return order


async def list_buyer_orders(db: AsyncSession, buyer_id: UUID) -> list[Order]:
    result = await db.execute(
        select(Order).where(Order.buyer_id == buyer_id)
        .order_by(Order.created_at.desc()),
    )
    return list(result.scalars().all())


async def list_all_orders(db: AsyncSession) -> list[Order]:
    result = await db.execute(select(Order).order_by(Order.created_at.desc()))
    return list(result.scalars().all())


async def update_order_status(
    db: AsyncSession, order_id: UUID, status: OrderStatus,
) -> Order:
    order = await get_order(db, order_id)
    order.status = status.value
    await db.commit()
    logger.info(
        f"Order status -> {status.value}", extra={"order_id": order.id},
    )
    return await get_order(db, order_id)
