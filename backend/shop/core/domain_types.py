"""Domain Types — enums and constants shared by models, schemas and services.

Invariants:
    - OrderStatus values are the exact strings the admin UI sends and displays
    - Role.ADMIN is exactly 1; any other role value is a regular user

Design Decisions:
    - str Enum for OrderStatus: serializes as plain JSON strings
    - IntEnum for Role: stored as an integer column, compared by value
"""

from enum import Enum, IntEnum


class Role(IntEnum):
    """User role stored on the users table."""
    USER = 0
    ADMIN = 1


class OrderStatus(str, Enum):
    """Order fulfilment states, in workflow order."""
    NOT_PROCESSED = "Not Process"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "deliverd"
    CANCELLED = "cancel"


# Listing limits
PRODUCTS_PER_PAGE = 6
HOME_PRODUCT_LIMIT = 12
RELATED_PRODUCT_LIMIT = 3

# Upload limits
MAX_PHOTO_BYTES = 1_000_000
DEFAULT_PHOTO_CONTENT_TYPE = "image/jpeg"

# Credentials
MIN_PASSWORD_LENGTH = 6
