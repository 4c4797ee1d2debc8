"""Product Service — catalog CRUD, photo storage, listing, filtering and search.

Invariants:
    - (name, category) unique: checked before every write (409), backed by a
      table constraint
    - Listing queries never load photo bytes (Product.photo_data is deferred)
    - Newest-first ordering (created_at desc, id as tiebreaker) for every list
    - Deleting a product detaches it from order lines (product_id -> NULL);
      the order keeps the name/price snapshot

Design Decisions:
    - Filters built as a list of SQLAlchemy clauses: an empty filter set means
      "all products", matching the storefront's unchecked state
    - Search is a case-insensitive substring match with LIKE wildcards escaped
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from shop.core.domain_types import (
    DEFAULT_PHOTO_CONTENT_TYPE,
    HOME_PRODUCT_LIMIT,
    RELATED_PRODUCT_LIMIT,
)
from shop.core.errors import DuplicateResourceError, ResourceNotFoundError
from shop.core.pagination import page_window
from shop.core.product_rules import ProductDraft
from shop.infrastructure.database import commit_unique
from shop.models.category import Category
from shop.models.order import OrderItem
from shop.models.product import Product
from shop.schemas.product import ProductFilters
from shop.services.categories import get_category, get_category_by_slug

logger = logging.getLogger(__name__)

_PRODUCT_NOT_FOUND = "Product not found"
_NAME_TAKEN = "Product with same name already exists in this category"
_NAME_TAKEN_ON_UPDATE = "Another product with same name exists in this category"


@dataclass(frozen=True)
class PhotoUpload:
    """Image bytes received with a create/update form."""
    data: bytes
    content_type: str | None = None


def _newest_first(query):
    return query.order_by(Product.created_at.desc(), Product.id.desc())


async def _find_duplicate(
    db: AsyncSession, name: str, category_id: UUID, exclude_id: UUID | None = None,
) -> Product | None:
    query = select(Product.id).where(
        Product.name == name, Product.category_id == category_id,
    )
    if exclude_id is not None:
        query = query.where(Product.id != exclude_id)
    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none()


async def get_product(db: AsyncSession, product_id: UUID) -> Product:
    result = await db.execute(
        select(Product).where(Product.id == product_id)
        .execution_options(populate_existing=True),
    )
    product = result.scalar_one_or_none()
    if not product:
        raise ResourceNotFoundError(
            "Product", str(product_id), message=_PRODUCT_NOT_FOUND,
        )
    return product


def _apply_photo(product: Product, photo: PhotoUpload | None) -> None:
    if photo is None:
        return
    product.photo_data = photo.data
    product.photo_content_type = photo.content_type or DEFAULT_PHOTO_CONTENT_TYPE


async def create_product(
    db: AsyncSession, draft: ProductDraft, photo: PhotoUpload | None = None,
) -> Product:
    await get_category(db, draft.category_id)
    if await _find_duplicate(db, draft.name, draft.category_id):
        raise DuplicateResourceError("Product", _NAME_TAKEN)

    product = Product(
        name=draft.name,
        slug=draft.slug,
        description=draft.description,
        price=draft.price,
        category_id=draft.category_id,
        quantity=draft.quantity,
        shipping=draft.shipping,
    )
    _apply_photo(product, photo)
    db.add(product)
    await commit_unique(db, "Product", _NAME_TAKEN)
    logger.info("Product created", extra={"product_id": product.id})
    return await get_product(db, product.id)


async def update_product(
    db: AsyncSession,
    product_id: UUID,
    draft: ProductDraft,
    photo: PhotoUpload | None = None,
) -> Product:
    product = await get_product(db, product_id)
    await get_category(db, draft.category_id)
    if await _find_duplicate(db, draft.name, draft.category_id, exclude_id=product.id):
        raise DuplicateResourceError("Product", _NAME_TAKEN_ON_UPDATE)

    product.name = draft.name
    product.slug = draft.slug
    product.description = draft.description
    product.price = draft.price
    product.category_id = draft.category_id
    product.quantity = draft.quantity
    if draft.shipping is not None:
        product.shipping = draft.shipping
    _apply_photo(product, photo)
    await commit_unique(db, "Product", _NAME_TAKEN_ON_UPDATE)
    logger.info("Product updated", extra={"product_id": product.id})
    return await get_product(db, product.id)


async def delete_product(db: AsyncSession, product_id: UUID) -> None:
    product = await get_product(db, product_id)
    await db.execute(
        update(OrderItem)
        .where(OrderItem.product_id == product.id)
        .values(product_id=None),
    )
    await db.delete(product)
    await db.commit()
    logger.info("Product deleted", extra={"product_id": product_id})


async def get_product_by_slug(db: AsyncSession, slug: str) -> Product:
    result = await db.execute(
        _newest_first(select(Product).where(Product.slug == slug)).limit(1),
    )
    product = result.scalars().first()
    if not product:
        raise ResourceNotFoundError("Product", slug, message=_PRODUCT_NOT_FOUND)
    return product


async def get_product_photo(db: AsyncSession, product_id: UUID) -> tuple[bytes, str]:
    """Photo bytes and content type; 404 when the product has no photo."""
    result = await db.execute(
        select(Product.photo_data, Product.photo_content_type)
        .where(Product.id == product_id),
    )
    row = result.one_or_none()
    if row is None or not row.photo_data:
        raise ResourceNotFoundError(
            "Photo", str(product_id), message="There does not exist a photo",
        )
    return row.photo_data, row.photo_content_type or DEFAULT_PHOTO_CONTENT_TYPE


async def list_recent_products(
    db: AsyncSession, limit: int = HOME_PRODUCT_LIMIT,
) -> list[Product]:
    result = await db.execute(_newest_first(select(Product)).limit(limit))
    return list(result.scalars().all())


async def count_products(db: AsyncSession) -> int:
    return await db.scalar(select(func.count()).select_from(Product)) or 0


async def list_products_page(db: AsyncSession, page: int) -> list[Product]:
    window = page_window(page)
    result = await db.execute(
        _newest_first(select(Product)).offset(window.offset).limit(window.limit),
    )
    return list(result.scalars().all())


def build_filter_clauses(filters: ProductFilters) -> list:
    """WHERE clauses for the storefront's category checkboxes and price radio."""
    clauses = []
    if filters.checked:
        clauses.append(Product.category_id.in_(filters.checked))
    if filters.price_range is not None:
        low, high = filters.price_range
        clauses.append(Product.price.between(low, high))
    return clauses


async def filter_products(db: AsyncSession, filters: ProductFilters) -> list[Product]:
    query = select(Product).where(*build_filter_clauses(filters))
    result = await db.execute(_newest_first(query))
    return list(result.scalars().all())


async def search_products(db: AsyncSession, keyword: str) -> list[Product]:
    keyword = keyword.strip()
    if not keyword:
        return []
    query = select(Product).where(
        or_(
            Product.name.icontains(keyword, autoescape=True),
            Product.description.icontains(keyword, autoescape=True),
        ),
    )
    result = await db.execute(_newest_first(query))
    return list(result.scalars().all())


async def related_products(
    db: AsyncSession, product_id: UUID, category_id: UUID,
) -> list[Product]:
    query = (
        select(Product)
        .where(Product.category_id == category_id, Product.id != product_id)
        .limit(RELATED_PRODUCT_LIMIT)
    )
    result = await db.execute(_newest_first(query))
    return list(result.scalars().all())


async def products_in_category(
    db: AsyncSession, slug: str,
) -> tuple[Category, list[Product]]:
    category = await get_category_by_slug(db, slug)
    result = await db.execute(
        _newest_first(select(Product).where(Product.category_id == category.id)),
    )
    return category, list(result.scalars().all())


async def get_products_by_ids(
    db: AsyncSession, product_ids: list[UUID],
) -> dict[UUID, Product]:
    if not product_ids:
        return {}
    result = await db.execute(
        select(Product).where(Product.id.in_(set(product_ids))),
    )
    return {p.id: p for p in result.scalars().all()}
