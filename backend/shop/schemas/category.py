"""Category Schemas."""

from pydantic import BaseModel, Field, field_validator


class CategoryRequest(BaseModel):
    """Create/update body; name presence checked by the service."""
    name: str | None = Field(None, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v
