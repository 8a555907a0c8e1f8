"""Integration tests for the product endpoints."""

from protean.utils.globals import current_domain
from storefront.product.product import ADMIN_OWNER, Product


class TestListProducts:
    def test_paginated_listing(self, client, make_product):
        for i in range(3):
            make_product(name=f"Lamp {i}", price=10.0 + i)

        response = client.get("/api/products", params={"limit": 2, "sort": "desc"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert [p["price"] for p in data["payload"]] == [12.0, 11.0]
        assert data["total_pages"] == 2
        assert data["has_next_page"] is True
        assert data["next_page"] == 2
        assert data["prev_page"] is None

    def test_invalid_sort_is_400_envelope(self, client):
        response = client.get("/api/products", params={"sort": "sideways"})
        assert response.status_code == 400
        assert response.json()["status"] == "error"
        assert "query.sort" in response.json()["errors"]

    def test_get_unknown_product_is_404(self, client):
        response = client.get("/api/products/prod-missing")
        assert response.status_code == 404
        assert response.json()["status"] == "error"

    def test_mocking_products(self, client):
        response = client.get("/api/products/mockingproducts")
        assert response.status_code == 200
        assert len(response.json()["payload"]) == 100
        assert current_domain.repository_for(Product)._dao.query.all().items == []


class TestManageProducts:
    def test_admin_creates_admin_owned_product(self, client, login):
        _, headers = login(email="root@example.com", role="admin")
        response = client.post("/api/products", json={"name": "Desk", "price": 99.0, "stock": 3}, headers=headers)
        assert response.status_code == 201
        assert response.json()["payload"]["owner"] == ADMIN_OWNER

    def test_premium_creates_own_product(self, client, login):
        user, headers = login(role="premium")
        response = client.post("/api/products", json={"name": "Radio", "price": 40.0}, headers=headers)
        assert response.status_code == 201
        assert response.json()["payload"]["owner"] == str(user.id)

    def test_plain_user_forbidden(self, client, login):
        _, headers = login()
        response = client.post("/api/products", json={"name": "Radio", "price": 40.0}, headers=headers)
        assert response.status_code == 403

    def test_anonymous_is_401(self, client):
        response = client.post("/api/products", json={"name": "Radio", "price": 40.0})
        assert response.status_code == 401

    def test_negative_price_is_400(self, client, login):
        _, headers = login(email="root@example.com", role="admin")
        response = client.post("/api/products", json={"name": "Radio", "price": -1}, headers=headers)
        assert response.status_code == 400
        assert "price" in response.json()["errors"]

    def test_owner_updates_and_deletes(self, client, login, make_product):
        user, headers = login(role="premium")
        product = make_product(owner=str(user.id))

        response = client.put(f"/api/products/{product.id}", json={"price": 7.5}, headers=headers)
        assert response.status_code == 200
        assert response.json()["payload"]["price"] == 7.5

        response = client.delete(f"/api/products/{product.id}", headers=headers)
        assert response.status_code == 200
        assert client.get(f"/api/products/{product.id}").status_code == 404

    def test_premium_cannot_touch_admin_product(self, client, login, make_product):
        _, headers = login(role="premium")
        product = make_product()
        response = client.delete(f"/api/products/{product.id}", headers=headers)
        assert response.status_code == 403

    def test_admin_seeds_products(self, client, login):
        _, headers = login(email="root@example.com", role="admin")
        response = client.post("/api/products/seed", json={"count": 5}, headers=headers)
        assert response.status_code == 201
        assert response.json()["payload"]["created"] == 5
