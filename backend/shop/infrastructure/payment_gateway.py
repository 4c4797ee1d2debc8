"""Braintree Payment Gateway — async facade over the synchronous Braintree SDK.

Invariants:
    - SDK calls run in a worker thread (asyncio.to_thread); the event loop never blocks
    - Every BraintreeError is mapped to PaymentGatewayError (core/errors.py)
    - A declined sale is NOT an exception here: it comes back as
      SaleResult(success=False); the checkout service decides what that means
    - No retries: a sale is not idempotent, a blind retry could double-charge

Design Decisions:
    - Wrapper over raw SDK: isolates error mapping from the checkout service
    - SaleResult dataclass: the order row stores to_payment_record(), never SDK objects
    - The SDK gateway is injectable so tests can drive success/decline/failure
"""

import asyncio
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import braintree
from braintree.exceptions.braintree_error import BraintreeError

from shop.config import get_settings
from shop.core.errors import PaymentGatewayError

logger = logging.getLogger(__name__)

_ENVIRONMENTS = {
    "sandbox": braintree.Environment.Sandbox,
    "production": braintree.Environment.Production,
}


@dataclass
class SaleResult:
    """Outcome of a sale call, detached from SDK types."""
    success: bool
    transaction_id: str | None = None
    amount: str | None = None
    status: str | None = None
    message: str | None = None
    errors: list[str] = field(default_factory=list)

    def to_payment_record(self) -> dict[str, Any]:
        """JSON-safe dict persisted on the order."""
        return {
            "success": self.success,
            "transaction": {
                "id": self.transaction_id,
                "amount": self.amount,
                "status": self.status,
            },
            "message": self.message,
        }


class BraintreePaymentGateway:
    """Client token generation and card sales through Braintree."""

    def __init__(self, sdk_gateway: Any):
        self._gateway = sdk_gateway

    @classmethod
    def from_credentials(
        cls,
        environment: str,
        merchant_id: str,
        public_key: str,
        private_key: str,
    ) -> "BraintreePaymentGateway":
        env = _ENVIRONMENTS.get(environment.lower())
        if env is None:
            raise ValueError(f"Unknown Braintree environment: {environment}")
        sdk_gateway = braintree.BraintreeGateway(
            braintree.Configuration(
                environment=env,
                merchant_id=merchant_id,
                public_key=public_key,
                private_key=private_key,
            ),
        )
        return cls(sdk_gateway)

    async def generate_client_token(self) -> str:
        """Token the drop-in UI uses to tokenize a card into a nonce."""
        try:
            return await asyncio.to_thread(self._gateway.client_token.generate)
        except BraintreeError as e:
            logger.error(f"Braintree client token failed: {e!r}")
            raise PaymentGatewayError(
                "Could not generate client token", type(e).__name__,
            )

    async def sale(self, amount: str, nonce: str) -> SaleResult:
        """Charge `amount` against `nonce`, submitting for settlement."""
        request = {
            "amount": amount,
            "payment_method_nonce": nonce,
            "options": {"submit_for_settlement": True},
        }
        try:
            result = await asyncio.to_thread(self._gateway.transaction.sale, request)
        except BraintreeError as e:
            logger.error(
                f"Braintree sale failed: {e!r}", extra={"amount": amount},
            )
            raise PaymentGatewayError(
                "Transaction could not be processed", type(e).__name__,
            )
        return _to_sale_result(result, amount)


def _to_sale_result(result: Any, amount: str) -> SaleResult:
    """Flatten SuccessfulResult / ErrorResult into a SaleResult."""
    transaction = getattr(result, "transaction", None)
    transaction_id = getattr(transaction, "id", None)
    status = getattr(transaction, "status", None)
    if result.is_success:
        return SaleResult(
            success=True,
            transaction_id=transaction_id,
            amount=str(getattr(transaction, "amount", amount)),
            status=status,
        )
    errors = []
    deep_errors = getattr(getattr(result, "errors", None), "deep_errors", None)
    if deep_errors:
        errors = [e.message for e in deep_errors]
    return SaleResult(
        success=False,
        transaction_id=transaction_id,
        amount=amount,
        status=status,
        message=getattr(result, "message", None),
        errors=errors,
    )


@lru_cache
def get_payment_gateway() -> BraintreePaymentGateway:
    """FastAPI dependency: process-wide gateway built from settings."""
    settings = get_settings()
    return BraintreePaymentGateway.from_credentials(
        environment=settings.braintree_environment,
        merchant_id=settings.braintree_merchant_id,
        public_key=settings.braintree_public_key,
        private_key=settings.braintree_private_key,
    )
