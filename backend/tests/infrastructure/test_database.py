"""Database Session Manager — error mapping, rollback, health check."""

import pytest
from sqlalchemy import func, select

from shop.core.errors import DatabaseError
from shop.db.base import Base
from shop.infrastructure.database import DatabaseSessionManager
from shop.models.category import Category


@pytest.fixture
async def manager():
    mgr = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    async with mgr.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield mgr
    await mgr.dispose()


async def test_health_check_ok(manager):
    assert await manager.health_check() is True


async def test_integrity_error_mapped_to_database_error(manager):
    with pytest.raises(DatabaseError) as exc:
        async with manager.session() as db:
            db.add(Category(name="Books", slug="books"))
            db.add(Category(name="Books", slug="books-2"))
            await db.commit()
    assert exc.value.operation == "commit"
    assert exc.value.http_status == 503


async def test_other_exceptions_propagate_unchanged(manager):
    with pytest.raises(KeyError):
        async with manager.session():
            raise KeyError("boom")


async def test_failed_session_leaves_no_partial_rows(manager):
    with pytest.raises(RuntimeError):
        async with manager.session() as db:
            db.add(Category(name="Games", slug="games"))
            await db.flush()
            raise RuntimeError("abort")

    async with manager.session() as db:
        count = await db.scalar(select(func.count()).select_from(Category))
    assert count == 0
