"""User Service — registration, login, password reset, profile, admin listing.

Invariants:
    - Passwords are hashed before they touch the session (core/passwords.py)
    - Email is unique; registration with a taken email is a 409, never an upsert
    - Forgot-password matches on (email, answer) together
    - Profile updates never change email or role

Design Decisions:
    - Services raise ShopError subclasses; routes shape the success payloads
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shop.core.domain_types import MIN_PASSWORD_LENGTH
from shop.core.errors import (
    AuthenticationError,
    DuplicateResourceError,
    InvalidFieldError,
    ResourceNotFoundError,
)
from shop.core.passwords import compare_password, hash_password
from shop.core.validation import is_blank, require_fields
from shop.infrastructure.database import commit_unique
from shop.models.user import User
from shop.schemas.auth import (
    ForgotPasswordRequest, LoginRequest, ProfileUpdate, RegisterRequest,
)

logger = logging.getLogger(__name__)

_REGISTER_FIELDS = ("name", "email", "password", "phone", "address", "answer")
_PASSWORD_RULE = "Passsword is required and 6 character long"
_EMAIL_TAKEN = "Already Register please login"


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user(db: AsyncSession, user_id: UUID) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def find_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(
        select(User).where(User.email == normalize_email(email)),
    )
    return result.scalar_one_or_none()


async def register_user(db: AsyncSession, body: RegisterRequest) -> User:
    """Create a customer account."""
    require_fields(body.model_dump(), _REGISTER_FIELDS)
    if len(body.password) < MIN_PASSWORD_LENGTH:
        raise InvalidFieldError("password", _PASSWORD_RULE)

    if await find_by_email(db, body.email):
        raise DuplicateResourceError("User", _EMAIL_TAKEN)

    user = User(
        name=body.name,
        email=normalize_email(body.email),
        password=hash_password(body.password),
        phone=body.phone,
        address=body.address,
        answer=body.answer,
    )
    db.add(user)
    await commit_unique(db, "User", _EMAIL_TAKEN)
    await db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id})
    return user


async def authenticate(db: AsyncSession, body: LoginRequest) -> User:
    """Return the user whose credentials match, or raise."""
    if is_blank(body.email) or is_blank(body.password):
        raise ResourceNotFoundError("User", message="Invalid email or password")

    user = await find_by_email(db, body.email)
    if not user:
        raise ResourceNotFoundError("User", message="Email is not registerd")
    if not compare_password(body.password, user.password):
        logger.info("Login rejected: bad password", extra={"user_id": user.id})
        raise AuthenticationError("Invalid Password")
    return user


async def reset_password(db: AsyncSession, body: ForgotPasswordRequest) -> None:
    """Replace the password when email and security answer both match."""
    if is_blank(body.email):
        raise InvalidFieldError("email", "Email is required")
    if is_blank(body.answer):
        raise InvalidFieldError("answer", "answer is required")
    if is_blank(body.new_password):
        raise InvalidFieldError("newPassword", "New Password is required")
    if len(body.new_password) < MIN_PASSWORD_LENGTH:
        raise InvalidFieldError("newPassword", _PASSWORD_RULE)

    result = await db.execute(
        select(User).where(
            User.email == normalize_email(body.email),
            User.answer == body.answer,
        ),
    )
    user = result.scalar_one_or_none()
    if not user:
        raise ResourceNotFoundError("User", message="Wrong Email Or Answer")

    user.password = hash_password(body.new_password)
    await db.commit()
    logger.info("Password reset", extra={"user_id": user.id})


async def update_profile(
    db: AsyncSession, user: User, body: ProfileUpdate,
) -> User:
    """Apply the non-blank fields of `body`; keep the rest."""
    if body.password and len(body.password) < MIN_PASSWORD_LENGTH:
        raise InvalidFieldError("password", _PASSWORD_RULE)

    if not is_blank(body.name):
        user.name = body.name
    if body.password:
        user.password = hash_password(body.password)
    if not is_blank(body.phone):
        user.phone = body.phone
    if not is_blank(body.address):
        user.address = body.address

    await db.commit()
    await db.refresh(user)
    logger.info("Profile updated", extra={"user_id": user.id})
    return user


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return list(result.scalars().all())
