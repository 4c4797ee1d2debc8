"""Password Hashing — bcrypt wrapper used by registration, login and resets.

Invariants:
    - Hashes use 10 bcrypt rounds
    - compare_password never raises on a malformed stored hash; it returns False
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

SALT_ROUNDS = 10


def hash_password(password: str) -> str:
    """Return the bcrypt hash of `password` as text."""
    salt = bcrypt.gensalt(rounds=SALT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def compare_password(password: str, hashed: str) -> bool:
    """Check `password` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False
