"""Error Hierarchy — typed, categorized exceptions for all shop failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (4xx) are recoverable; infrastructure errors (5xx) are critical
    - to_response() always carries success=False and a human message, which is
      what the storefront reads, plus a structured "error" object
    - Checkout errors (payment data, decline, gateway, orphaned charge) carry
      ok=False and "error" as the message string; the structured object is
      under "detail"
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ShopError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and client debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_id: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class ShopError(Exception):
    """Base exception for all shop errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {
            "success": False,
            "message": self.message,
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "resource_id": self.context.resource_id,
                    "field": self.context.field,
                },
            },
        }


def _checkout_body(error: ShopError) -> dict:
    """Checkout envelope: ok=False and "error" as the plain message the
    storefront displays; the structured object moves to "detail"."""
    response = ShopError.to_response(error)
    response["detail"] = response.pop("error")
    response["error"] = error.message
    response["ok"] = False
    return response


# ─── Domain Errors (400-level) ──────────────────────────────────

class FieldRequiredError(ShopError):
    """A mandatory request field is missing or blank."""
    def __init__(self, field_name: str, message: str | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field_name
        super().__init__(
            message or f"{field_name.capitalize()} is Required",
            "FIELD_REQUIRED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field_name


class InvalidFieldError(ShopError):
    """A request field is present but has an unusable value."""
    def __init__(self, field_name: str, message: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field_name
        super().__init__(
            message, "INVALID_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field_name


class InvalidPaymentDataError(InvalidFieldError):
    """Checkout body unusable (no nonce, empty cart, unknown product)."""
    def __init__(self, message: str = "Invalid payment data: missing nonce or cart items", context: ErrorContext | None = None):
        super().__init__("cart", message, context)
        self.code = "INVALID_PAYMENT_DATA"

    def to_response(self) -> dict:
        return _checkout_body(self)


class AuthenticationError(ShopError):
    """Credentials or token missing, invalid or expired."""
    def __init__(self, message: str = "Unauthorized", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class AuthorizationError(ShopError):
    """Signed-in user lacks the role required by the route."""
    def __init__(self, message: str = "UnAuthorized Access", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED_ACCESS", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(ShopError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str | None = None,
        message: str | None = None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            message or f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type


class DuplicateResourceError(ShopError):
    """Unique business key already taken."""
    def __init__(self, resource_type: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DUPLICATE_RESOURCE", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.resource_type = resource_type


class ResourceInUseError(ShopError):
    """Resource cannot be removed while other records reference it."""
    def __init__(self, resource_type: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_IN_USE", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.resource_type = resource_type


class PaymentDeclinedError(ShopError):
    """Gateway processed the sale but did not approve it."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PAYMENT_DECLINED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )

    def to_response(self) -> dict:
        response = _checkout_body(self)
        response["declined"] = True
        return response


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ShopError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class PaymentGatewayError(ShopError):
    """Braintree call failed before a transaction result was produced."""
    def __init__(self, message: str, gateway_error_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Payment gateway error ({gateway_error_type}): {message}",
            "PAYMENT_GATEWAY_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.gateway_error_type = gateway_error_type

    def to_response(self) -> dict:
        return _checkout_body(self)


class OrderPersistenceError(ShopError):
    """Charge succeeded but the order row could not be written."""
    def __init__(self, payment_id: str, context: ErrorContext | None = None):
        super().__init__(
            "Payment processed but order creation failed",
            "ORDER_PERSISTENCE_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.payment_id = payment_id

    def to_response(self) -> dict:
        response = _checkout_body(self)
        response["paymentId"] = self.payment_id
        return response
