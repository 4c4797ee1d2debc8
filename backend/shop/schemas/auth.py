"""Auth Schemas — request bodies for registration, login, reset and profile.

Invariants:
    - All fields optional at the schema level: presence is checked in order by
      core/validation.require_fields so the client gets "<Field> is Required"
    - Strings are stripped; passwords are not
    - Length caps on every field
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Stripped(BaseModel):
    """Strips surrounding whitespace from every string field except passwords."""

    @field_validator("*", mode="before")
    @classmethod
    def strip_strings(cls, v, info):
        if isinstance(v, str) and "password" not in info.field_name:
            return v.strip()
        return v


class RegisterRequest(_Stripped):
    name: str | None = Field(None, max_length=200)
    email: str | None = Field(None, max_length=320)
    password: str | None = Field(None, max_length=128)
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=2000)
    answer: str | None = Field(None, max_length=200)


class LoginRequest(_Stripped):
    email: str | None = Field(None, max_length=320)
    password: str | None = Field(None, max_length=128)


class ForgotPasswordRequest(_Stripped):
    model_config = ConfigDict(populate_by_name=True)

    email: str | None = Field(None, max_length=320)
    answer: str | None = Field(None, max_length=200)
    new_password: str | None = Field(None, alias="newPassword", max_length=128)


class ProfileUpdate(_Stripped):
    """Partial profile update; email is accepted but never changed."""
    name: str | None = Field(None, max_length=200)
    email: str | None = Field(None, max_length=320)
    password: str | None = Field(None, max_length=128)
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=2000)
