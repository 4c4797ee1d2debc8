"""Product Routes — catalog, search, filters, photos and checkout under /api/v1/product.

Invariants:
    - create/update accept multipart forms (fields + optional "photo" file)
    - The multipart parser spools the whole upload before the handler runs;
      the max_photo_bytes + 1 read only caps the in-memory copy handed to
      validation, so an oversized photo is still rejected with 400
    - /search/{keyword} returns a bare JSON array (storefront contract)
    - /braintree/payment requires a signed-in buyer
"""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from shop.api.dependencies import require_admin, require_sign_in
from shop.api.serializers import serialize_category, serialize_product
from shop.config import get_settings
from shop.core.product_rules import ProductDraft, validate_product_form
from shop.infrastructure.database import get_db
from shop.infrastructure.payment_gateway import (
    BraintreePaymentGateway, get_payment_gateway,
)
from shop.models.user import User
from shop.schemas.order import PaymentRequest
from shop.schemas.product import ProductFilters
from shop.services import checkout as checkout_service
from shop.services import products
from shop.services.products import PhotoUpload

router = APIRouter(prefix="/api/v1/product", tags=["product"])


class ProductForm:
    """Multipart product form, validated into a draft plus optional photo."""

    def __init__(
        self,
        name: str | None = Form(None),
        description: str | None = Form(None),
        price: str | None = Form(None),
        category: str | None = Form(None),
        quantity: str | None = Form(None),
        shipping: str | None = Form(None),
        photo: UploadFile | None = File(None),
    ):
        self.fields = {
            "name": name,
            "description": description,
            "price": price,
            "category": category,
            "quantity": quantity,
            "shipping": shipping,
        }
        self.photo = photo

    async def parse(self) -> tuple[ProductDraft, PhotoUpload | None]:
        max_bytes = get_settings().max_photo_bytes
        upload = None
        if self.photo is not None and self.photo.filename:
            data = await self.photo.read(max_bytes + 1)
            upload = PhotoUpload(data=data, content_type=self.photo.content_type)
        draft = validate_product_form(
            self.fields,
            photo_size=len(upload.data) if upload else None,
            max_photo_bytes=max_bytes,
        )
        return draft, upload


# ─── Admin writes ───────────────────────────────────────────────

@router.post("/create-product", status_code=status.HTTP_201_CREATED)
async def create_product(
    form: ProductForm = Depends(),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    draft, photo = await form.parse()
    product = await products.create_product(db, draft, photo)
    return {
        "success": True,
        "message": "Product Created Successfully",
        "products": serialize_product(product),
    }


@router.put("/update-product/{product_id}")
async def update_product(
    product_id: UUID,
    form: ProductForm = Depends(),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    draft, photo = await form.parse()
    product = await products.update_product(db, product_id, draft, photo)
    return {
        "success": True,
        "message": "Product Updated Successfully",
        "products": serialize_product(product),
    }


@router.delete("/delete-product/{product_id}")
async def delete_product(
    product_id: UUID,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await products.delete_product(db, product_id)
    return {"success": True, "message": "Product Deleted successfully"}


# ─── Public reads ───────────────────────────────────────────────

@router.get("/get-product")
async def recent_products(db: AsyncSession = Depends(get_db)):
    result = await products.list_recent_products(db)
    return {
        "success": True,
        "countTotal": len(result),
        "message": "All Products",
        "products": [serialize_product(p) for p in result],
    }


@router.get("/get-product/{slug}")
async def product_by_slug(slug: str, db: AsyncSession = Depends(get_db)):
    product = await products.get_product_by_slug(db, slug)
    return {
        "success": True,
        "message": "Single Product Fetched",
        "product": serialize_product(product),
    }


@router.get("/get-product-by-id/{product_id}")
async def product_by_id(product_id: UUID, db: AsyncSession = Depends(get_db)):
    product = await products.get_product(db, product_id)
    return {"success": True, "product": serialize_product(product)}


@router.get("/product-photo/{product_id}")
async def product_photo(product_id: UUID, db: AsyncSession = Depends(get_db)):
    data, content_type = await products.get_product_photo(db, product_id)
    return Response(content=data, media_type=content_type)


@router.post("/product-filters")
async def product_filters(
    body: ProductFilters, db: AsyncSession = Depends(get_db),
):
    result = await products.filter_products(db, body)
    return {"success": True, "products": [serialize_product(p) for p in result]}


@router.get("/product-count")
async def product_count(db: AsyncSession = Depends(get_db)):
    total = await products.count_products(db)
    return {"success": True, "total": total}


@router.get("/product-list/{page}")
async def product_list(page: int, db: AsyncSession = Depends(get_db)):
    result = await products.list_products_page(db, page)
    return {"success": True, "products": [serialize_product(p) for p in result]}


@router.get("/search/{keyword}")
async def search(keyword: str, db: AsyncSession = Depends(get_db)):
    result = await products.search_products(db, keyword)
    return [serialize_product(p) for p in result]


@router.get("/related-product/{product_id}/{category_id}")
async def related(
    product_id: UUID, category_id: UUID, db: AsyncSession = Depends(get_db),
):
    result = await products.related_products(db, product_id, category_id)
    return {"success": True, "products": [serialize_product(p) for p in result]}


@router.get("/product-category/{slug}")
async def products_by_category(slug: str, db: AsyncSession = Depends(get_db)):
    category, result = await products.products_in_category(db, slug)
    return {
        "success": True,
        "category": serialize_category(category),
        "products": [serialize_product(p) for p in result],
    }


# ─── Payment ────────────────────────────────────────────────────

@router.get("/braintree/token")
async def braintree_token(
    gateway: BraintreePaymentGateway = Depends(get_payment_gateway),
):
    token = await gateway.generate_client_token()
    return {"success": True, "clientToken": token}


@router.post("/braintree/payment")
async def braintree_payment(
    body: PaymentRequest,
    user: User = Depends(require_sign_in),
    gateway: BraintreePaymentGateway = Depends(get_payment_gateway),
    db: AsyncSession = Depends(get_db),
):
    order = await checkout_service.checkout(db, gateway, user, body)
    return {"ok": True, "orderId": str(order.id)}
