"""Request Guards — JWT sign-in and admin role checks as FastAPI dependencies.

Invariants:
    - require_sign_in: valid token AND an existing user, else 401
    - require_admin: signed in AND role == 1, else 401 "UnAuthorized Access"
    - The user is loaded in the request's own DB session (get_db is cached
      per request), so services can modify and commit it directly
"""

import logging
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from shop.config import get_settings
from shop.core.errors import AuthenticationError, AuthorizationError
from shop.core.tokens import decode_token
from shop.infrastructure.database import get_db
from shop.models.user import User
from shop.services.users import get_user

logger = logging.getLogger(__name__)


async def require_sign_in(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    payload = decode_token(authorization, get_settings().jwt_secret)
    try:
        user_id = UUID(str(payload["_id"]))
    except ValueError:
        raise AuthenticationError("Invalid token")
    user = await get_user(db, user_id)
    if not user:
        raise AuthenticationError("User no longer exists")
    return user


async def require_admin(user: User = Depends(require_sign_in)) -> User:
    if not user.is_admin:
        logger.warning("Admin route denied", extra={"user_id": user.id})
        raise AuthorizationError()
    return user
