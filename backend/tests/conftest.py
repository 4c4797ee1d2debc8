"""Root conftest — shared test configuration."""

import os

# Tests never talk to a real database or a real Braintree account
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("BRAINTREE_ENVIRONMENT", "sandbox")
os.environ.setdefault("LOG_FORMAT", "text")
