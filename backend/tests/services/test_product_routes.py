"""Product Routes — multipart create/update, photos, reads, delete.

Invariants:
    - Product JSON never carries photo bytes, only hasPhoto
    - Photo served with its stored content type
    - (name, category) is unique
"""

from uuid import uuid4

from tests.services.seed import make_category, make_product

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


def _form(owner, **overrides):
    """Product form fields filed under `owner`; keyword overrides win."""
    data = {
        "name": "Blue Shirt",
        "description": "Cotton shirt",
        "price": "19.90",
        "category": str(owner.id),
        "quantity": "3",
        "shipping": "1",
    }
    data.update(overrides)
    return data


async def test_create_product_with_photo(client, admin_headers, category):
    res = await client.post(
        "/api/v1/product/create-product",
        headers=admin_headers,
        data=_form(category),
        files={"photo": ("shirt.png", PNG_BYTES, "image/png")},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Product Created Successfully"
    product = body["products"]
    assert product["slug"] == "blue-shirt"
    assert product["price"] == 19.9
    assert product["shipping"] is True
    assert product["hasPhoto"] is True
    assert product["category"]["name"] == "Books"
    assert "photo" not in product

    photo = await client.get(f"/api/v1/product/product-photo/{product['_id']}")
    assert photo.status_code == 200
    assert photo.content == PNG_BYTES
    assert photo.headers["content-type"] == "image/png"


async def test_create_product_without_photo(client, admin_headers, category):
    res = await client.post(
        "/api/v1/product/create-product",
        headers=admin_headers, data=_form(category, shipping="0"),
    )
    assert res.status_code == 201
    product = res.json()["products"]
    assert product["hasPhoto"] is False
    assert product["shipping"] is False

    photo = await client.get(f"/api/v1/product/product-photo/{product['_id']}")
    assert photo.status_code == 404


async def test_create_product_missing_field(client, admin_headers, category):
    res = await client.post(
        "/api/v1/product/create-product",
        headers=admin_headers, data=_form(category, price=""),
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Price is Required"


async def test_create_product_oversized_photo(client, admin_headers, category):
    res = await client.post(
        "/api/v1/product/create-product",
        headers=admin_headers,
        data=_form(category),
        files={"photo": ("big.jpg", b"x" * 1_000_001, "image/jpeg")},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "photo is Required and should be less then 1mb"


async def test_create_product_unknown_category(client, admin_headers, category):
    res = await client.post(
        "/api/v1/product/create-product",
        headers=admin_headers, data=_form(category, category=str(uuid4())),
    )
    assert res.status_code == 404


async def test_create_product_duplicate_in_category(client, test_db, admin_headers, category):
    await make_product(test_db, category, name="Blue Shirt")
    res = await client.post(
        "/api/v1/product/create-product",
        headers=admin_headers, data=_form(category),
    )
    assert res.status_code == 409


async def _no_duplicate(db, name, category_id, exclude_id=None):
    return None


async def test_create_product_race_on_name_conflicts(
    client, test_db, admin_headers, category, monkeypatch,
):
    await make_product(test_db, category, name="Blue Shirt")
    monkeypatch.setattr("shop.services.products._find_duplicate", _no_duplicate)
    res = await client.post(
        "/api/v1/product/create-product",
        headers=admin_headers, data=_form(category),
    )
    assert res.status_code == 409
    assert res.json()["message"] == "Product with same name already exists in this category"


async def test_same_name_allowed_in_other_category(client, test_db, admin_headers, category):
    other = await make_category(test_db, "Clothes")
    await make_product(test_db, category, name="Blue Shirt")
    res = await client.post(
        "/api/v1/product/create-product",
        headers=admin_headers, data=_form(other),
    )
    assert res.status_code == 201


async def test_create_product_requires_admin(client, customer_headers, category):
    res = await client.post(
        "/api/v1/product/create-product",
        headers=customer_headers, data=_form(category),
    )
    assert res.status_code == 401


async def test_update_product_keeps_photo_when_none_sent(client, test_db, admin_headers, category):
    product = await make_product(test_db, category, photo=PNG_BYTES)
    res = await client.put(
        f"/api/v1/product/update-product/{product.id}",
        headers=admin_headers,
        data=_form(category, name="Renamed Novel", price="12.5"),
    )
    assert res.status_code == 200
    updated = res.json()["products"]
    assert updated["name"] == "Renamed Novel"
    assert updated["slug"] == "renamed-novel"
    assert updated["price"] == 12.5
    assert updated["hasPhoto"] is True

    photo = await client.get(f"/api/v1/product/product-photo/{product.id}")
    assert photo.content == PNG_BYTES


async def test_update_product_replaces_photo(client, test_db, admin_headers, category):
    product = await make_product(test_db, category, photo=PNG_BYTES)
    res = await client.put(
        f"/api/v1/product/update-product/{product.id}",
        headers=admin_headers,
        data=_form(category),
        files={"photo": ("new.jpg", b"jpeg-bytes", "image/jpeg")},
    )
    assert res.status_code == 200

    photo = await client.get(f"/api/v1/product/product-photo/{product.id}")
    assert photo.content == b"jpeg-bytes"
    assert photo.headers["content-type"] == "image/jpeg"


async def test_update_product_moves_category(client, test_db, admin_headers, category):
    product = await make_product(test_db, category)
    other = await make_category(test_db, "Clothes")
    res = await client.put(
        f"/api/v1/product/update-product/{product.id}",
        headers=admin_headers, data=_form(other),
    )
    assert res.status_code == 200
    assert res.json()["products"]["category"]["name"] == "Clothes"


async def test_update_product_name_clash(client, test_db, admin_headers, category):
    await make_product(test_db, category, name="Blue Shirt")
    product = await make_product(test_db, category, name="Red Shirt")
    res = await client.put(
        f"/api/v1/product/update-product/{product.id}",
        headers=admin_headers, data=_form(category),
    )
    assert res.status_code == 409
    assert res.json()["message"] == "Another product with same name exists in this category"


async def test_update_product_race_on_name_conflicts(
    client, test_db, admin_headers, category, monkeypatch,
):
    await make_product(test_db, category, name="Blue Shirt")
    product = await make_product(test_db, category, name="Red Shirt")
    monkeypatch.setattr("shop.services.products._find_duplicate", _no_duplicate)
    res = await client.put(
        f"/api/v1/product/update-product/{product.id}",
        headers=admin_headers, data=_form(category),
    )
    assert res.status_code == 409
    assert res.json()["message"] == "Another product with same name exists in this category"


async def test_update_unknown_product(client, admin_headers, category):
    res = await client.put(
        f"/api/v1/product/update-product/{uuid4()}",
        headers=admin_headers, data=_form(category),
    )
    assert res.status_code == 404


async def test_delete_product(client, admin_headers, product):
    res = await client.delete(
        f"/api/v1/product/delete-product/{product.id}", headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["message"] == "Product Deleted successfully"

    res = await client.get(f"/api/v1/product/get-product-by-id/{product.id}")
    assert res.status_code == 404


async def test_get_product_by_slug(client, product):
    res = await client.get("/api/v1/product/get-product/novel")
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Single Product Fetched"
    assert body["product"]["_id"] == str(product.id)
    assert body["product"]["category"]["slug"] == "books"


async def test_get_product_by_unknown_slug(client):
    res = await client.get("/api/v1/product/get-product/missing")
    assert res.status_code == 404
    assert res.json()["message"] == "Product not found"


async def test_get_product_by_id(client, product):
    res = await client.get(f"/api/v1/product/get-product-by-id/{product.id}")
    assert res.status_code == 200
    assert res.json()["product"]["name"] == "Novel"
