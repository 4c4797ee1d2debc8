"""Product Schemas — JSON bodies of the product endpoints.

Invariants:
    - ProductFilters.checked: category ids; empty list = any category
    - ProductFilters.radio: empty (any price) or exactly [min, max] with min <= max

Design Decisions:
    - Create/update use multipart forms, validated by core/product_rules, not here
"""

from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class ProductFilters(BaseModel):
    checked: list[UUID] = Field(default_factory=list, max_length=200)
    radio: list[float] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_price_range(self):
        if self.radio and len(self.radio) != 2:
            raise ValueError("radio must be empty or [min, max]")
        if self.radio and self.radio[0] > self.radio[1]:
            raise ValueError("radio minimum must not exceed maximum")
        return self

    @property
    def price_range(self) -> tuple[float, float] | None:
        return (self.radio[0], self.radio[1]) if self.radio else None
