"""Category Routes — admin CRUD, slugs, public reads, delete guard."""

from tests.services.seed import make_category, make_product


async def test_create_category(client, admin_headers):
    res = await client.post(
        "/api/v1/category/create-category",
        headers=admin_headers, json={"name": "  Home Garden "},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "new category created"
    assert body["category"]["name"] == "Home Garden"
    assert body["category"]["slug"] == "home-garden"


async def test_create_category_requires_name(client, admin_headers):
    res = await client.post(
        "/api/v1/category/create-category", headers=admin_headers, json={"name": " "},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Name is required"


async def test_create_category_duplicate(client, admin_headers, category):
    res = await client.post(
        "/api/v1/category/create-category",
        headers=admin_headers, json={"name": "Books"},
    )
    assert res.status_code == 409
    assert res.json()["message"] == "Category Already Exists"


async def _no_category(db, name):
    return None


async def test_create_category_race_on_name_conflicts(
    client, admin_headers, category, monkeypatch,
):
    monkeypatch.setattr("shop.services.categories._find_by_name", _no_category)
    res = await client.post(
        "/api/v1/category/create-category",
        headers=admin_headers, json={"name": "Books"},
    )
    assert res.status_code == 409
    assert res.json()["message"] == "Category Already Exists"


async def test_create_category_requires_admin(client, customer_headers):
    res = await client.post(
        "/api/v1/category/create-category",
        headers=customer_headers, json={"name": "Toys"},
    )
    assert res.status_code == 401


async def test_update_category_regenerates_slug(client, admin_headers, category):
    res = await client.put(
        f"/api/v1/category/update-category/{category.id}",
        headers=admin_headers, json={"name": "Rare Books"},
    )
    assert res.status_code == 200
    assert res.json()["category"]["slug"] == "rare-books"


async def test_update_category_to_same_name_allowed(client, admin_headers, category):
    res = await client.put(
        f"/api/v1/category/update-category/{category.id}",
        headers=admin_headers, json={"name": "Books"},
    )
    assert res.status_code == 200


async def test_update_category_to_taken_name(client, test_db, admin_headers, category):
    await make_category(test_db, "Music")
    res = await client.put(
        f"/api/v1/category/update-category/{category.id}",
        headers=admin_headers, json={"name": "Music"},
    )
    assert res.status_code == 409


async def test_rename_category_race_on_name_conflicts(
    client, test_db, admin_headers, category, monkeypatch,
):
    await make_category(test_db, "Music")
    monkeypatch.setattr("shop.services.categories._find_by_name", _no_category)
    res = await client.put(
        f"/api/v1/category/update-category/{category.id}",
        headers=admin_headers, json={"name": "Music"},
    )
    assert res.status_code == 409
    assert res.json()["message"] == "Category Already Exists"


async def test_update_unknown_category(client, admin_headers):
    res = await client.put(
        "/api/v1/category/update-category/00000000-0000-0000-0000-000000000000",
        headers=admin_headers, json={"name": "Phantom"},
    )
    assert res.status_code == 404


async def test_list_categories_sorted_by_name(client, test_db):
    await make_category(test_db, "Toys")
    await make_category(test_db, "Art")
    res = await client.get("/api/v1/category/get-category")
    assert res.status_code == 200
    assert [c["name"] for c in res.json()["category"]] == ["Art", "Toys"]


async def test_single_category_by_slug(client, category):
    res = await client.get("/api/v1/category/single-category/books")
    assert res.status_code == 200
    assert res.json()["category"]["_id"] == str(category.id)


async def test_single_category_unknown_slug(client):
    res = await client.get("/api/v1/category/single-category/nope")
    assert res.status_code == 404


async def test_delete_empty_category(client, admin_headers, category):
    res = await client.delete(
        f"/api/v1/category/delete-category/{category.id}", headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["message"] == "Category Deleted Successfully"

    res = await client.get("/api/v1/category/get-category")
    assert res.json()["category"] == []


async def test_delete_category_with_products_blocked(client, test_db, admin_headers, category):
    await make_product(test_db, category)
    res = await client.delete(
        f"/api/v1/category/delete-category/{category.id}", headers=admin_headers,
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "RESOURCE_IN_USE"


async def test_malformed_id_is_400(client, admin_headers):
    res = await client.delete(
        "/api/v1/category/delete-category/not-a-uuid", headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
