"""
ProductHub Backend — HTTP Endpoint Tests
==========================================

What:  Exercises every route through the real FastAPI app.
How:   httpx AsyncClient over ASGITransport; the MongoStore dependency is
       replaced by the in-memory store (test_client), a store that cannot
       connect (down_client), or one whose driver calls fail (broken_client).
"""

import pytest
from bson import Decimal128, ObjectId


class TestLiveness:

    @pytest.mark.asyncio
    async def test_root_reports_ok(self, test_client, fake_store):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "message": "ProductHub Server is Running"}
        assert fake_store.connect_calls == 1

    @pytest.mark.asyncio
    async def test_root_reports_error_when_store_is_down(self, down_client):
        response = await down_client.get("/")

        assert response.status_code == 500
        assert response.json() == {"status": "error"}

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"


class TestProductRoutes:

    @pytest.mark.asyncio
    async def test_create_then_fetch(self, test_client):
        created = await test_client.post(
            "/products", json={"name": "Lamp", "userId": "s1", "inStock": False}
        )

        assert created.status_code == 200
        body = created.json()
        assert body["success"] is True
        assert ObjectId.is_valid(body["insertedId"])

        fetched = await test_client.get(f"/products/{body['insertedId']}")
        product = fetched.json()
        assert fetched.status_code == 200
        assert product["_id"] == body["insertedId"]
        assert product["inStock"] is True
        assert isinstance(product["createdAt"], str)

    @pytest.mark.asyncio
    async def test_fetch_absent_product_returns_empty_object(self, test_client):
        response = await test_client.get(f"/products/{ObjectId()}")

        assert response.status_code == 200
        assert response.json() == {}

    @pytest.mark.asyncio
    async def test_fetch_with_malformed_id_returns_empty_object_400(self, test_client):
        response = await test_client.get("/products/definitely-not-an-id")

        assert response.status_code == 400
        assert response.json() == {}

    @pytest.mark.asyncio
    async def test_list_returns_array(self, test_client):
        await test_client.post("/products", json={"name": "A"})
        await test_client.post("/products", json={"name": "B"})

        response = await test_client.get("/products")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["A", "B"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/products", "/products/user/s1"])
    async def test_listings_return_empty_array_when_store_is_down(self, down_client, path):
        response = await down_client.get(path)

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/products", "/products/user/s1"])
    async def test_listings_return_empty_array_on_driver_error(self, broken_client, path):
        response = await broken_client.get(path)

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_by_user(self, test_client):
        await test_client.post("/products", json={"name": "Mine", "userId": "s1"})
        await test_client.post("/products", json={"name": "Theirs", "userId": "s2"})

        response = await test_client.get("/products/user/s1")

        assert [p["name"] for p in response.json()] == ["Mine"]

    @pytest.mark.asyncio
    async def test_update_reports_modified(self, test_client):
        created = (await test_client.post("/products", json={"name": "Old"})).json()

        response = await test_client.put(f"/products/{created['insertedId']}", json={"name": "New"})

        assert response.json() == {"success": True}

    @pytest.mark.asyncio
    async def test_update_absent_product_reports_false(self, test_client):
        response = await test_client.put(f"/products/{ObjectId()}", json={"name": "New"})

        assert response.status_code == 200
        assert response.json() == {"success": False}

    @pytest.mark.asyncio
    async def test_update_with_malformed_id_is_500(self, test_client):
        response = await test_client.put("/products/bad-id", json={"name": "New"})

        assert response.status_code == 500
        assert response.json() == {"success": False}

    @pytest.mark.asyncio
    async def test_delete_absent_product_reports_false(self, test_client):
        response = await test_client.delete(f"/products/{ObjectId()}")

        assert response.status_code == 200
        assert response.json() == {"success": False}

    @pytest.mark.asyncio
    async def test_delete_existing_product(self, test_client):
        created = (await test_client.post("/products", json={"name": "Gone"})).json()

        response = await test_client.delete(f"/products/{created['insertedId']}")

        assert response.json() == {"success": True}

    @pytest.mark.asyncio
    async def test_create_fails_with_500_when_store_is_down(self, down_client):
        response = await down_client.post("/products", json={"name": "Lamp"})

        assert response.status_code == 500
        assert response.json() == {"success": False}

    @pytest.mark.asyncio
    async def test_toggle_twice_restores_stock(self, test_client):
        created = (await test_client.post("/products", json={"name": "Mug"})).json()
        path = f"/products/{created['insertedId']}"

        first = await test_client.patch(f"/products/toggle/{created['insertedId']}")
        assert first.json() == {"success": True}
        assert (await test_client.get(path)).json()["inStock"] is False

        await test_client.patch(f"/products/toggle/{created['insertedId']}")
        assert (await test_client.get(path)).json()["inStock"] is True

    @pytest.mark.asyncio
    async def test_toggle_absent_product(self, test_client):
        response = await test_client.patch(f"/products/toggle/{ObjectId()}")

        assert response.status_code == 200
        assert response.json() == {"success": False}

    @pytest.mark.asyncio
    async def test_toggle_malformed_id_is_500(self, test_client):
        response = await test_client.patch("/products/toggle/nope")

        assert response.status_code == 500
        assert response.json() == {"success": False}


class TestStoredValuesRoundTrip:
    """Whatever a client stores comes back unchanged, and never hides other documents."""

    @pytest.mark.asyncio
    async def test_odd_values_written_by_put_keep_every_listing_intact(self, test_client):
        first = (await test_client.post("/products", json={"name": "A", "userId": "s1"})).json()
        await test_client.post("/products", json={"name": "B", "userId": "s1"})

        updated = await test_client.put(
            f"/products/{first['insertedId']}",
            json={"createdAt": "last week", "inStock": "maybe"},
        )
        assert updated.json() == {"success": True}

        listed = await test_client.get("/products")
        assert listed.status_code == 200
        assert sorted(p["name"] for p in listed.json()) == ["A", "B"]

        by_seller = await test_client.get("/products/user/s1")
        assert sorted(p["name"] for p in by_seller.json()) == ["A", "B"]

        fetched = await test_client.get(f"/products/{first['insertedId']}")
        assert fetched.status_code == 200
        assert fetched.json()["createdAt"] == "last week"
        assert fetched.json()["inStock"] == "maybe"

    @pytest.mark.asyncio
    async def test_created_product_keeps_client_types(self, test_client):
        body = {
            "name": "Kettle",
            "userId": 7,
            "price": 19.5,
            "tags": ["kitchen", 3, None],
            "dims": {"h": 20, "unit": "cm"},
        }
        created = (await test_client.post("/products", json=body)).json()

        product = (await test_client.get(f"/products/{created['insertedId']}")).json()

        assert product["userId"] == 7
        assert product["price"] == 19.5
        assert product["tags"] == ["kitchen", 3, None]
        assert product["dims"] == {"h": 20, "unit": "cm"}
        assert (await test_client.get("/products")).json()[0]["userId"] == 7

    @pytest.mark.asyncio
    async def test_put_values_come_back_as_sent(self, test_client):
        created = (await test_client.post("/products", json={"name": "Mat", "userId": "s1"})).json()

        await test_client.put(
            f"/products/{created['insertedId']}",
            json={"userId": None, "inStock": 0, "createdAt": 1700000000, "extra": {"a": [1, 2]}},
        )

        product = (await test_client.get(f"/products/{created['insertedId']}")).json()
        assert product["userId"] is None
        assert product["inStock"] == 0
        assert product["createdAt"] == 1700000000
        assert product["extra"] == {"a": [1, 2]}

    @pytest.mark.asyncio
    async def test_rating_round_trip(self, test_client):
        await test_client.post(
            "/ratings",
            json={"productId": "p1", "sellerId": 9, "stars": 4.5, "meta": {"verified": True}},
        )

        ratings = (await test_client.get("/ratings/product/p1")).json()

        assert len(ratings) == 1
        assert ratings[0]["sellerId"] == 9
        assert ratings[0]["stars"] == 4.5
        assert ratings[0]["meta"] == {"verified": True}
        assert ObjectId.is_valid(ratings[0]["_id"])

    @pytest.mark.asyncio
    async def test_decimal_prices_are_listed(self, test_client, fake_store):
        result = await fake_store.collections.products.insert_one(
            {"name": "X", "price": Decimal128("9.99")}
        )

        listed = await test_client.get("/products")
        fetched = await test_client.get(f"/products/{result.inserted_id}")

        assert listed.status_code == 200
        assert listed.json() == [
            {"_id": str(result.inserted_id), "name": "X", "price": {"$numberDecimal": "9.99"}}
        ]
        assert fetched.json()["price"] == {"$numberDecimal": "9.99"}

    @pytest.mark.asyncio
    async def test_unrenderable_value_falls_back_per_route(self, test_client, fake_store):
        result = await fake_store.collections.products.insert_one(
            {"name": "Blob", "raw": b"\xff\xfe"}
        )

        listed = await test_client.get("/products")
        fetched = await test_client.get(f"/products/{result.inserted_id}")

        assert listed.status_code == 200
        assert listed.json() == []
        assert fetched.status_code == 400
        assert fetched.json() == {}


class TestUserRoutes:

    @pytest.mark.asyncio
    async def test_create_and_list(self, test_client):
        created = await test_client.post("/users", json={"email": "a@example.com", "role": "seller"})

        assert created.json()["success"] is True
        assert ObjectId.is_valid(created.json()["insertedId"])

        users = (await test_client.get("/users")).json()
        assert users == [
            {"_id": created.json()["insertedId"], "email": "a@example.com", "role": "seller"}
        ]

    @pytest.mark.asyncio
    async def test_list_when_store_is_down(self, down_client):
        response = await down_client.get("/users")
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_create_when_store_is_down(self, down_client):
        response = await down_client.post("/users", json={"email": "a@example.com"})
        assert response.status_code == 500
        assert response.json() == {"success": False}


class TestRatingRoutes:

    @pytest.mark.asyncio
    async def test_create_and_list_by_product(self, test_client):
        created = await test_client.post(
            "/ratings", json={"productId": "p1", "sellerId": "s1", "stars": 5}
        )
        await test_client.post("/ratings", json={"productId": "p2", "sellerId": "s1", "stars": 3})

        assert created.json() == {"success": True}
        ratings = (await test_client.get("/ratings/product/p1")).json()
        assert [r["stars"] for r in ratings] == [5]

    @pytest.mark.asyncio
    async def test_list_on_driver_error(self, broken_client):
        response = await broken_client.get("/ratings/product/p1")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_create_on_driver_error(self, broken_client):
        response = await broken_client.post("/ratings", json={"productId": "p1"})
        assert response.status_code == 500
        assert response.json() == {"success": False}


class TestCategoryRoutes:

    @pytest.mark.asyncio
    async def test_crud_flow(self, test_client, fake_store):
        created = await test_client.post("/categories", json={"name": "Lighting"})
        assert created.json() == {"success": True}

        categories = (await test_client.get("/categories")).json()
        assert [c["name"] for c in categories] == ["Lighting"]
        category_id = categories[0]["_id"]

        updated = await test_client.put(f"/categories/{category_id}", json={"name": "Lamps"})
        assert updated.json() == {"success": True}
        fetched = (await test_client.get(f"/categories/{category_id}")).json()
        assert fetched["name"] == "Lamps"

        deleted = await test_client.delete(f"/categories/{category_id}")
        assert deleted.json() == {"success": True}
        assert fake_store.collections.categories.docs == []

    @pytest.mark.asyncio
    async def test_delete_absent_category_still_succeeds(self, test_client):
        """Category delete answers success regardless of prior existence (products do not)."""
        category = await test_client.delete(f"/categories/{ObjectId()}")
        product = await test_client.delete(f"/products/{ObjectId()}")

        assert category.json() == {"success": True}
        assert product.json() == {"success": False}

    @pytest.mark.asyncio
    async def test_update_absent_category_still_succeeds(self, test_client):
        response = await test_client.put(f"/categories/{ObjectId()}", json={"name": "x"})
        assert response.json() == {"success": True}

    @pytest.mark.asyncio
    async def test_delete_malformed_id_is_500(self, test_client):
        response = await test_client.delete("/categories/bad")

        assert response.status_code == 500
        assert response.json() == {"success": False}

    @pytest.mark.asyncio
    async def test_get_malformed_id(self, test_client):
        response = await test_client.get("/categories/bad")

        assert response.status_code == 400
        assert response.json() == {}

    @pytest.mark.asyncio
    async def test_list_when_store_is_down(self, down_client):
        response = await down_client.get("/categories")
        assert response.json() == []


class TestCartRoutes:

    @pytest.mark.asyncio
    async def test_add_twice_yields_single_item(self, test_client):
        for _ in range(2):
            response = await test_client.post("/cart/add", json={"userId": "u1", "productId": "p1"})
            assert response.json() == {"success": True}

        items = (await test_client.get("/cart/u1")).json()
        assert items == [{"productId": "p1", "qty": 2}]

    @pytest.mark.asyncio
    async def test_new_user_gets_one_cart_with_one_item(self, test_client, fake_store):
        await test_client.post("/cart/add", json={"userId": "fresh", "productId": "p9"})

        carts = fake_store.collections.carts.docs
        assert len(carts) == 1
        assert carts[0]["items"] == [{"productId": "p9", "qty": 1}]

    @pytest.mark.asyncio
    async def test_empty_cart_for_unknown_user(self, test_client):
        response = await test_client.get("/cart/nobody")
        assert response.json() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"userId": "u1"}, {"productId": "p1"}, {}])
    async def test_add_missing_fields_is_400(self, test_client, body):
        response = await test_client.post("/cart/add", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False}

    @pytest.mark.asyncio
    async def test_add_without_body_is_400(self, test_client):
        response = await test_client.post("/cart/add")

        assert response.status_code == 400
        assert response.json() == {"success": False}

    @pytest.mark.asyncio
    async def test_add_when_store_is_down_is_500(self, down_client):
        response = await down_client.post("/cart/add", json={"userId": "u1", "productId": "p1"})

        assert response.status_code == 500
        assert response.json() == {"success": False}

    @pytest.mark.asyncio
    async def test_get_cart_when_store_is_down(self, down_client):
        response = await down_client.get("/cart/u1")
        assert response.status_code == 200
        assert response.json() == []


class TestDashboardRoute:

    @pytest.mark.asyncio
    async def test_aggregates_products_and_ratings(self, test_client):
        await test_client.post("/products", json={"name": "A", "userId": "s1"})
        await test_client.post("/products", json={"name": "B", "userId": "s1"})
        await test_client.post("/products", json={"name": "C", "userId": "s2"})
        await test_client.post("/ratings", json={"sellerId": "s1", "stars": 4})

        response = await test_client.get("/store-dashboard/s1")

        body = response.json()
        assert response.status_code == 200
        assert body["totalProducts"] == 2
        assert body["totalOrders"] == 0
        assert body["totalEarnings"] == 0
        assert [r["stars"] for r in body["ratings"]] == [4]

    @pytest.mark.asyncio
    async def test_zeroed_payload_when_store_is_down(self, down_client):
        response = await down_client.get("/store-dashboard/s1")

        assert response.status_code == 500
        assert response.json() == {
            "totalProducts": 0,
            "totalOrders": 0,
            "totalEarnings": 0,
            "ratings": [],
        }
