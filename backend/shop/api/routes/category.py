"""Category Routes — /api/v1/category; writes are admin-only."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shop.api.dependencies import require_admin
from shop.api.serializers import serialize_category
from shop.infrastructure.database import get_db
from shop.models.user import User
from shop.schemas.category import CategoryRequest
from shop.services import categories

router = APIRouter(prefix="/api/v1/category", tags=["category"])


@router.post("/create-category", status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryRequest,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    category = await categories.create_category(db, body.name)
    return {
        "success": True,
        "message": "new category created",
        "category": serialize_category(category),
    }


@router.put("/update-category/{category_id}")
async def update_category(
    category_id: UUID,
    body: CategoryRequest,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    category = await categories.update_category(db, category_id, body.name)
    return {
        "success": True,
        "message": "Category Updated Successfully",
        "category": serialize_category(category),
    }


@router.get("/get-category")
async def list_categories(db: AsyncSession = Depends(get_db)):
    result = await categories.list_categories(db)
    return {
        "success": True,
        "message": "All Categories List",
        "category": [serialize_category(c) for c in result],
    }


@router.get("/single-category/{slug}")
async def single_category(slug: str, db: AsyncSession = Depends(get_db)):
    category = await categories.get_category_by_slug(db, slug)
    return {
        "success": True,
        "message": "Get Single Category Successfully",
        "category": serialize_category(category),
    }


@router.delete("/delete-category/{category_id}")
async def delete_category(
    category_id: UUID,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await categories.delete_category(db, category_id)
    return {"success": True, "message": "Category Deleted Successfully"}
