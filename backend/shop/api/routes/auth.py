"""Auth Routes — accounts, sessions, profile and order views under /api/v1/auth.

Invariants:
    - Login returns the user without password/answer plus a signed token
    - /orders only returns the caller's orders; /all-orders and
      /order-status are admin-only
    - Success bodies carry success=True and a message (storefront contract)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from shop.api.dependencies import require_admin, require_sign_in
from shop.api.serializers import serialize_order, serialize_user
from shop.config import get_settings
from shop.core.tokens import create_token
from shop.infrastructure.database import get_db
from shop.models.user import User
from shop.schemas.auth import (
    ForgotPasswordRequest, LoginRequest, ProfileUpdate, RegisterRequest,
)
from shop.schemas.order import OrderStatusUpdate
from shop.services import orders, users

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create a customer account."""
    user = await users.register_user(db, body)
    return {
        "success": True,
        "message": "User Register Successfully",
        "user": serialize_user(user),
    }


@router.post("/login")
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Exchange email/password for a token."""
    user = await users.authenticate(db, body)
    settings = get_settings()
    token = create_token(user.id, settings.jwt_secret, settings.jwt_expiry_days)
    logger.info("User logged in", extra={"user_id": user.id})
    return {
        "success": True,
        "message": "login successfully",
        "user": serialize_user(user),
        "token": token,
    }


@router.post("/forgot-password")
async def forgot_password(
    body: ForgotPasswordRequest, db: AsyncSession = Depends(get_db),
):
    """Reset the password using the security answer."""
    await users.reset_password(db, body)
    return {"success": True, "message": "Password Reset Successfully"}


@router.get("/test")
async def protected_test(user: User = Depends(require_admin)):
    """Smoke endpoint for the admin guard."""
    return JSONResponse(content="Protected Routes")


@router.get("/user-auth")
async def user_auth(user: User = Depends(require_sign_in)):
    """Storefront's private-route check."""
    return {"ok": True}


@router.get("/admin-auth")
async def admin_auth(user: User = Depends(require_admin)):
    """Admin dashboard's route check."""
    return {"ok": True}


@router.put("/profile")
async def update_profile(
    body: ProfileUpdate,
    user: User = Depends(require_sign_in),
    db: AsyncSession = Depends(get_db),
):
    updated = await users.update_profile(db, user, body)
    return {
        "success": True,
        "message": "Profile Updated SUccessfully",
        "updatedUser": serialize_user(updated),
    }


@router.get("/orders")
async def buyer_orders(
    user: User = Depends(require_sign_in),
    db: AsyncSession = Depends(get_db),
):
    """Orders placed by the caller, newest first (bare JSON array)."""
    result = await orders.list_buyer_orders(db, user.id)
    return [serialize_order(o) for o in result]


@router.get("/all-orders")
async def all_orders(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Every order, newest first (bare JSON array)."""
    result = await orders.list_all_orders(db)
    return [serialize_order(o) for o in result]


@router.put("/order-status/{order_id}")
async def order_status(
    order_id: UUID,
    body: OrderStatusUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    order = await orders.update_order_status(db, order_id, body.status)
    return serialize_order(order)


@router.get("/all-users")
async def all_users(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    result = await users.list_users(db)
    return {
        "success": True,
        "message": "All Users",
        "users": [serialize_user(u) for u in result],
    }
