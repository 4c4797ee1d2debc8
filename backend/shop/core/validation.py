"""Field Presence Checks — ordered required-field validation with readable messages.

Invariants:
    - Fields are checked in the given order; only the first missing one is reported
    - None, empty and whitespace-only strings count as missing
"""

from collections.abc import Iterable, Mapping
from typing import Any

from shop.core.errors import FieldRequiredError


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(values: Mapping[str, Any], names: Iterable[str]) -> None:
    """Raise FieldRequiredError for the first blank field in `names`."""
    for name in names:
        if is_blank(values.get(name)):
            raise FieldRequiredError(name)
