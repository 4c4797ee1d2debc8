"""Checkout Rules — cart validation and total computation for card payments.

Invariants:
    - A payable cart has a nonce and at least one line
    - One cart line = one unit; the total is the plain sum of line prices
    - Totals are Decimal rounded half-up to cents before reaching the gateway
"""

from collections.abc import Iterable
from decimal import Decimal, ROUND_HALF_UP

from shop.core.errors import InvalidPaymentDataError

_CENT = Decimal("0.01")


def require_payment_payload(nonce: str | None, cart: list | None) -> None:
    """Reject checkout bodies without a nonce or without cart lines."""
    if not nonce or not cart:
        raise InvalidPaymentDataError()


def cart_total(prices: Iterable[float | int | Decimal]) -> Decimal:
    """Sum line prices; str() conversion avoids binary float drift."""
    total = sum((Decimal(str(p)) for p in prices), Decimal("0"))
    return total.quantize(_CENT, rounding=ROUND_HALF_UP)


def format_amount(total: Decimal) -> str:
    """Gateway amount string, always two decimals ("19.90")."""
    return str(total.quantize(_CENT, rounding=ROUND_HALF_UP))
