"""Service test fixtures — async DB, fake Braintree, FastAPI test client, seed data.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe sees the test engine
    - get_payment_gateway overridden with a gateway wrapping FakeBraintreeSdk

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Seed fixtures write through the ORM, requests go through the client:
      route tests observe only what the API returns
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from shop.core.domain_types import Role
from shop.db.base import Base
from shop.infrastructure.database import get_db, DatabaseSessionManager
from shop.infrastructure.payment_gateway import (
    BraintreePaymentGateway, get_payment_gateway,
)
import shop.infrastructure.database as db_module
from shop.main import app

from tests.services.mock_braintree import FakeBraintreeSdk
from tests.services.seed import (
    auth_headers, make_category, make_product, make_user,
)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def braintree_sdk():
    return FakeBraintreeSdk()


@pytest.fixture
def payment_gateway(braintree_sdk):
    return BraintreePaymentGateway(braintree_sdk)


@pytest.fixture
async def client(test_engine, test_session_factory, payment_gateway):
    """FastAPI test client with DB and payment dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# -- Seed data -----------------------------------------------------------------


@pytest.fixture
async def customer(test_db):
    return await make_user(test_db)


@pytest.fixture
async def admin(test_db):
    return await make_user(
        test_db, email="admin@example.com", role=Role.ADMIN, name="Admin",
    )


@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
async def category(test_db):
    return await make_category(test_db)


@pytest.fixture
async def product(test_db, category):
    return await make_product(test_db, category)
