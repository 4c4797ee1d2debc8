"""Pagination — page-number to offset/limit arithmetic for product listings.

Invariants:
    - Pages are 1-based; page < 1 is rejected, never clamped
    - page_window(page) covers items [(page - 1) * per_page, page * per_page)
"""

from dataclasses import dataclass

from shop.core.domain_types import PRODUCTS_PER_PAGE
from shop.core.errors import InvalidFieldError


@dataclass(frozen=True)
class PageWindow:
    """Offset/limit pair handed to the query builder."""
    offset: int
    limit: int


def page_window(page: int, per_page: int = PRODUCTS_PER_PAGE) -> PageWindow:
    """Translate a 1-based page number into an offset/limit window."""
    if per_page < 1:
        raise ValueError("per_page must be positive")
    if page < 1:
        raise InvalidFieldError("page", "Page must be 1 or greater")
    return PageWindow(offset=(page - 1) * per_page, limit=per_page)

