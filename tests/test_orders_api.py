"""
HTTP tests for the order endpoints.
"""

import pytest

BASE = "/examples"


class TestUserOrders:
    """GET/POST /users/{id}/orders."""

    def test_list(self, client):
        body = client.get(f"{BASE}/users/1/orders").json()
        assert len(body) == 1
        order = body[0]
        assert order["id"] == 1
        assert order["status"] == "COMPLETED"
        assert [item["name"] for item in order["items"]] == ["Laptop", "Mouse"]
        assert set(order) == {"id", "userId", "items", "total", "status", "createdAt"}

    def test_list_for_user_without_orders(self, client):
        response = client.get(f"{BASE}/users/3/orders")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_unknown_user(self, client):
        assert client.get(f"{BASE}/users/42/orders").status_code == 404

    def test_create(self, client):
        response = client.post(
            f"{BASE}/users/3/orders",
            json={"items": [{"name": "Phone", "quantity": 1, "price": 599.99}, {"name": "Case", "quantity": 2, "price": 10}]},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 3
        assert body["userId"] == 3
        assert body["status"] == "PENDING"
        assert body["total"] == 619.99
        assert len(client.get(f"{BASE}/users/3/orders").json()) == 1

    def test_create_for_unknown_user(self, client):
        response = client.post(
            f"{BASE}/users/42/orders", json={"items": [{"name": "Phone", "quantity": 1, "price": 1}]}
        )
        assert response.status_code == 404
        assert response.json()["error"] == "User 42 not found"
        assert client.get(f"{BASE}/stats").json()["totalOrders"] == 2
        assert client.get(f"{BASE}/orders").json()["totalElements"] == 2

    def test_revenue_beyond_float_range(self, client):
        item = {"name": "Server", "quantity": 1, "price": "1e308"}
        assert client.post(f"{BASE}/users/1/orders", json={"items": [item]}).status_code == 201
        stats_before = client.get(f"{BASE}/stats").json()

        response = client.post(f"{BASE}/users/2/orders", json={"items": [item]})
        assert response.status_code == 400
        assert response.json()["errors"] == ["Total revenue is out of range"]

        stats = client.get(f"{BASE}/stats").json()
        assert stats == stats_before
        assert stats["totalRevenue"] is not None

    def test_empty_items(self, client):
        response = client.post(f"{BASE}/users/1/orders", json={"items": []})
        assert response.status_code == 400
        assert response.json()["error"] == "An order must contain at least one item"

    def test_invalid_items(self, client):
        response = client.post(
            f"{BASE}/users/1/orders",
            json={"items": [{"name": "", "quantity": 0, "price": -5}]},
        )
        assert response.status_code == 400
        assert len(response.json()["errors"]) == 3

    @pytest.mark.parametrize(
        "item",
        [
            {"name": "Server", "quantity": 1, "price": "1e400"},
            {"name": "Server", "quantity": 10**300, "price": "1e300"},
        ],
    )
    def test_amount_beyond_float_range(self, client, item):
        stats_before = client.get(f"{BASE}/stats").json()

        response = client.post(f"{BASE}/users/1/orders", json={"items": [item]})
        assert response.status_code == 400
        assert len(response.json()["errors"]) == 1

        assert client.get(f"{BASE}/stats").json() == stats_before
        assert client.get(f"{BASE}/orders").json()["totalElements"] == 2

    def test_malformed_item(self, client):
        response = client.post(
            f"{BASE}/users/1/orders",
            json={"items": [{"name": "Phone", "quantity": "many", "price": 1}]},
        )
        assert response.status_code == 400
        assert response.json()["errors"][0].startswith("items.0.quantity")


class TestOrders:
    """GET /orders, GET /orders/{id}, PATCH /orders/{id}/status."""

    def test_list_all(self, client):
        body = client.get(f"{BASE}/orders").json()
        assert [order["id"] for order in body["content"]] == [1, 2]
        assert body["totalElements"] == 2

    def test_filter_and_search(self, client):
        body = client.get(f"{BASE}/orders", params={"status": "pending"}).json()
        assert [order["id"] for order in body["content"]] == [2]

        body = client.get(f"{BASE}/orders", params={"search": "laptop"}).json()
        assert [order["id"] for order in body["content"]] == [1]

    def test_get(self, client):
        body = client.get(f"{BASE}/orders/2").json()
        assert body["total"] == 89.99
        assert client.get(f"{BASE}/orders/9").status_code == 404

    def test_status_transition(self, client):
        response = client.patch(f"{BASE}/orders/2/status", json={"status": "COMPLETED"})
        assert response.status_code == 200
        assert response.json()["status"] == "COMPLETED"
        assert client.get(f"{BASE}/users/2").json()["orders"][0]["status"] == "COMPLETED"

    def test_invalid_status(self, client):
        response = client.patch(f"{BASE}/orders/2/status", json={"status": "SHIPPED"})
        assert response.status_code == 400
