"""Response Shapes — ORM objects to the JSON the storefront consumes.

Invariants:
    - Ids are emitted under "_id" and timestamps as "createdAt"/"updatedAt"
      (storefront contract)
    - Users never expose password or security answer
    - Products never expose photo bytes, only hasPhoto
    - Order lines: live product when it still exists, otherwise the snapshot
"""

from shop.models.category import Category
from shop.models.order import Order, OrderItem
from shop.models.product import Product
from shop.models.user import User


def _iso(value):
    return value.isoformat() if value else None


def serialize_user(user: User) -> dict:
    return {
        "_id": str(user.id),
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "address": user.address,
        "role": user.role,
        "createdAt": _iso(user.created_at),
    }


def serialize_category(category: Category | None) -> dict | None:
    if category is None:
        return None
    return {
        "_id": str(category.id),
        "name": category.name,
        "slug": category.slug,
    }


def serialize_product(product: Product) -> dict:
    return {
        "_id": str(product.id),
        "name": product.name,
        "slug": product.slug,
        "description": product.description,
        "price": product.price,
        "category": serialize_category(product.category),
        "quantity": product.quantity,
        "shipping": product.shipping,
        "hasPhoto": product.photo_content_type is not None,
        "createdAt": _iso(product.created_at),
        "updatedAt": _iso(product.updated_at),
    }


def serialize_order_item(item: OrderItem) -> dict:
    if item.product is not None:
        line = serialize_product(item.product)
        line["purchasedPrice"] = item.price
        return line
    return {
        "_id": None,
        "name": item.name,
        "price": item.price,
        "purchasedPrice": item.price,
        "deleted": True,
    }


def serialize_order(order: Order) -> dict:
    return {
        "_id": str(order.id),
        "products": [serialize_order_item(item) for item in order.items],
        "payment": order.payment,
        "buyer": {"_id": str(order.buyer.id), "name": order.buyer.name},
        "status": order.status,
        "createdAt": _iso(order.created_at),
        "updatedAt": _iso(order.updated_at),
    }
