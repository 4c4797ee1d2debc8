"""Checkout Service — prices the cart, charges the card, records the order.

Invariants:
    - Nothing is charged unless every cart line resolves to an existing product
    - Amount charged = cart_total of database prices (client prices ignored)
    - Order row written only after the gateway reports success
    - A successful charge whose order cannot be written surfaces the
      transaction id (OrderPersistenceError) so it can be reconciled or voided

Design Decisions:
    - Declines raised as PaymentDeclinedError (400, declined=True): the
      storefront shows the gateway message and lets the buyer retry
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shop.core.checkout import cart_total, format_amount, require_payment_payload
from shop.core.errors import (
    InvalidPaymentDataError,
    OrderPersistenceError,
    PaymentDeclinedError,
)
from shop.infrastructure.payment_gateway import BraintreePaymentGateway
from shop.models.order import Order
from shop.models.user import User
from shop.schemas.order import PaymentRequest
from shop.services.orders import create_order
from shop.services.products import get_products_by_ids

logger = logging.getLogger(__name__)

_DEFAULT_DECLINE = "Payment declined. Please check your card details."


async def checkout(
    db: AsyncSession,
    gateway: BraintreePaymentGateway,
    buyer: User,
    payload: PaymentRequest,
) -> Order:
    """Charge the buyer for `payload.cart` and return the created order."""
    require_payment_payload(payload.nonce, payload.cart)
    # read before any rollback; rollback expires `buyer`
    buyer_id = buyer.id

    product_ids = [line.product_id for line in payload.cart]
    catalog = await get_products_by_ids(db, product_ids)
    missing = [str(pid) for pid in product_ids if pid not in catalog]
    if missing:
        raise InvalidPaymentDataError(
            "Some cart items are no longer available: " + ", ".join(sorted(set(missing))),
        )
    purchased = [catalog[pid] for pid in product_ids]

    amount = format_amount(cart_total(p.price for p in purchased))
    logger.info(
        "Processing payment",
        extra={"user_id": buyer_id, "amount": amount},
    )

    sale = await gateway.sale(amount, payload.nonce)
    if not sale.success:
        logger.info(
            f"Payment declined: {sale.message}",
            extra={"user_id": buyer_id, "amount": amount},
        )
        raise PaymentDeclinedError(sale.message or _DEFAULT_DECLINE)

    try:
        return await create_order(db, buyer_id, purchased, sale)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Order creation failed after payment: {e}",
            extra={"user_id": buyer_id, "transaction_id": sale.transaction_id},
        )
        raise OrderPersistenceError(sale.transaction_id or "unknown")
