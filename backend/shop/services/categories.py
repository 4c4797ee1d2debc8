"""Category Service — admin CRUD and public lookups for product categories.

Invariants:
    - Names unique (case-sensitive, as stored); slug regenerated on every rename
    - A category still referenced by products cannot be deleted
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shop.core.errors import (
    DuplicateResourceError,
    FieldRequiredError,
    ResourceInUseError,
    ResourceNotFoundError,
)
from shop.core.product_rules import make_slug
from shop.core.validation import is_blank
from shop.infrastructure.database import commit_unique
from shop.models.category import Category
from shop.models.product import Product

logger = logging.getLogger(__name__)

_NAME_TAKEN = "Category Already Exists"


def _require_name(name: str | None) -> str:
    if is_blank(name):
        raise FieldRequiredError("name", "Name is required")
    return name.strip()


async def _find_by_name(db: AsyncSession, name: str) -> Category | None:
    result = await db.execute(select(Category).where(Category.name == name))
    return result.scalar_one_or_none()


async def get_category(db: AsyncSession, category_id: UUID) -> Category:
    category = await db.get(Category, category_id)
    if not category:
        raise ResourceNotFoundError("Category", str(category_id))
    return category


async def create_category(db: AsyncSession, name: str | None) -> Category:
    name = _require_name(name)
    if await _find_by_name(db, name):
        raise DuplicateResourceError("Category", _NAME_TAKEN)

    category = Category(name=name, slug=make_slug(name))
    db.add(category)
    await commit_unique(db, "Category", _NAME_TAKEN)
    await db.refresh(category)
    logger.info(f"Category created: {category.slug}")
    return category


async def update_category(
    db: AsyncSession, category_id: UUID, name: str | None,
) -> Category:
    name = _require_name(name)
    category = await get_category(db, category_id)

    existing = await _find_by_name(db, name)
    if existing and existing.id != category.id:
        raise DuplicateResourceError("Category", _NAME_TAKEN)

    category.name = name
    category.slug = make_slug(name)
    await commit_unique(db, "Category", _NAME_TAKEN)
    await db.refresh(category)
    return category


async def list_categories(db: AsyncSession) -> list[Category]:
    result = await db.execute(select(Category).order_by(Category.name))
    return list(result.scalars().all())


async def get_category_by_slug(db: AsyncSession, slug: str) -> Category:
    result = await db.execute(
        select(Category).where(Category.slug == slug.lower()),
    )
    category = result.scalar_one_or_none()
    if not category:
        raise ResourceNotFoundError("Category", slug)
    return category


async def delete_category(db: AsyncSession, category_id: UUID) -> None:
    category = await get_category(db, category_id)

    in_use = await db.scalar(
        select(func.count()).select_from(Product)
        .where(Product.category_id == category.id),
    )
    if in_use:
        raise ResourceInUseError(
            "Category",
            f"Category still has {in_use} product(s); move or delete them first",
        )

    await db.delete(category)
    await db.commit()
    logger.info(f"Category deleted: {category.slug}")
