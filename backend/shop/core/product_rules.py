"""Product Form Rules — validation and coercion of the multipart product form.

Invariants:
    - Required fields checked in a fixed order: name, description, price,
      category, quantity; the first missing one is reported
    - Photo size checked before numeric coercion
    - price is a finite number >= 0; quantity is a whole number >= 0
    - slug derived from the name only (python-slugify, lowercase, hyphenated)

Design Decisions:
    - Rules kept pure (raw strings in, ProductDraft out): the multipart
      parsing stays in the route, the category lookup stays in the service
"""

import math
from dataclasses import dataclass
from uuid import UUID

from slugify import slugify

from shop.core.domain_types import MAX_PHOTO_BYTES
from shop.core.errors import InvalidFieldError
from shop.core.validation import require_fields

_REQUIRED_FIELDS = ("name", "description", "price", "category", "quantity")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class ProductDraft:
    """Validated product fields ready to be written to the ORM."""
    name: str
    slug: str
    description: str
    price: float
    category_id: UUID
    quantity: int
    shipping: bool | None


def make_slug(text: str) -> str:
    """URL slug used for products and categories."""
    return slugify(text)


def validate_product_form(
    fields: dict[str, str | None],
    photo_size: int | None = None,
    max_photo_bytes: int = MAX_PHOTO_BYTES,
) -> ProductDraft:
    """Validate raw form fields and return a typed draft."""
    require_fields(fields, _REQUIRED_FIELDS)

    if photo_size is not None and photo_size > max_photo_bytes:
        raise InvalidFieldError(
            "photo", "photo is Required and should be less then 1mb",
        )

    price = _parse_price(fields["price"])
    quantity = _parse_quantity(fields["quantity"])
    category_id = _parse_category_id(fields["category"])
    name = fields["name"].strip()

    return ProductDraft(
        name=name,
        slug=make_slug(name),
        description=fields["description"].strip(),
        price=price,
        category_id=category_id,
        quantity=quantity,
        shipping=parse_shipping(fields.get("shipping")),
    )


def parse_shipping(raw: str | None) -> bool | None:
    """Checkbox-style form value to bool; absent stays None."""
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidFieldError("shipping", "Shipping must be a yes/no value")


def _parse_price(raw: str) -> float:
    try:
        price = float(raw)
    except (TypeError, ValueError):
        raise InvalidFieldError("price", "Price must be a number")
    if not math.isfinite(price):
        raise InvalidFieldError("price", "Price must be a number")
    if price < 0:
        raise InvalidFieldError("price", "Price cannot be negative")
    return price


def _parse_quantity(raw: str) -> int:
    try:
        quantity = float(raw)
    except (TypeError, ValueError):
        raise InvalidFieldError("quantity", "Quantity must be a number")
    if not math.isfinite(quantity) or not quantity.is_integer():
        raise InvalidFieldError("quantity", "Quantity must be a whole number")
    if quantity < 0:
        raise InvalidFieldError("quantity", "Quantity cannot be negative")
    return int(quantity)


def _parse_category_id(raw: str) -> UUID:
    try:
        return UUID(raw.strip())
    except ValueError:
        raise InvalidFieldError("category", "Category must be a valid id")
