"""Access Tokens — HS256 JWT issue and verification.

Invariants:
    - Payload carries the user id as "_id" (string) plus iat/exp
    - decode_token accepts a raw token or "Bearer <token>"
    - Any decode failure surfaces as AuthenticationError, never a jwt exception

Design Decisions:
    - Secret and lifetime passed in by the caller: core stays settings-free
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from shop.core.errors import AuthenticationError

ALGORITHM = "HS256"
_BEARER_PREFIX = "bearer "


def create_token(user_id: UUID | str, secret: str, expiry_days: int = 7) -> str:
    """Sign a token identifying `user_id`."""
    now = datetime.now(timezone.utc)
    payload = {
        "_id": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=expiry_days),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def extract_token(authorization: str | None) -> str:
    """Pull the token out of an Authorization header value."""
    if not authorization or not authorization.strip():
        raise AuthenticationError("Authorization token missing")
    value = authorization.strip()
    if value.lower() == _BEARER_PREFIX.strip():
        raise AuthenticationError("Authorization token missing")
    if value.lower().startswith(_BEARER_PREFIX):
        value = value[len(_BEARER_PREFIX):].strip()
    if not value:
        raise AuthenticationError("Authorization token missing")
    return value


def decode_token(authorization: str | None, secret: str) -> dict:
    """Verify the token and return its payload."""
    token = extract_token(authorization)
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")
    if "_id" not in payload:
        raise AuthenticationError("Invalid token")
    return payload
