"""API tests for customers, customer groups and orders."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from storefront.main import app


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def customer(client):
    response = client.post("/v1/customers/", json={"external_id": "cust_1", "name": "Asha"})
    return response.json()


class TestCustomerGroupsAPI:
    def test_create_and_list(self, client):
        response = client.post("/v1/customers/groups", json={"code": "vip", "name": "VIP"})
        assert response.status_code == 201
        assert response.json()["code"] == "vip"

        groups = client.get("/v1/customers/groups").json()
        assert [g["code"] for g in groups] == ["vip"]

    def test_duplicate(self, client):
        client.post("/v1/customers/groups", json={"code": "vip", "name": "VIP"})
        response = client.post("/v1/customers/groups", json={"code": "vip", "name": "Again"})
        assert response.status_code == 409


class TestCustomersAPI:
    def test_create_with_groups(self, client):
        client.post("/v1/customers/groups", json={"code": "vip", "name": "VIP"})
        response = client.post(
            "/v1/customers/",
            json={
                "external_id": "cust_9",
                "name": "Ravi",
                "tier": "gold",
                "group_codes": ["vip"],
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["tier"] == "gold"
        assert [g["code"] for g in data["groups"]] == ["vip"]

    def test_unknown_group(self, client):
        response = client.post(
            "/v1/customers/",
            json={"external_id": "cust_9", "name": "Ravi", "group_codes": ["nobody"]},
        )
        assert response.status_code == 400
        assert "nobody" in response.json()["detail"]

    def test_duplicate_external_id(self, client, customer):
        response = client.post("/v1/customers/", json={"external_id": "cust_1", "name": "Other"})
        assert response.status_code == 409

    def test_list_and_get(self, client, customer):
        response = client.get("/v1/customers/")
        assert response.headers["X-Total-Count"] == "1"
        assert client.get("/v1/customers/cust_1").json()["id"] == customer["id"]
        assert client.get("/v1/customers/missing").status_code == 404


class TestOrdersAPI:
    def test_create_and_get(self, client, customer):
        response = client.post(
            "/v1/orders/",
            json={"customer_id": customer["id"], "order_number": "ORD-1", "total": "499"},
        )
        assert response.status_code == 201
        order = response.json()
        assert order["status"] == "pending"

        assert client.get(f"/v1/orders/{order['id']}").json()["order_number"] == "ORD-1"
        assert client.get(f"/v1/orders/{uuid4()}").status_code == 404

    def test_unknown_customer(self, client):
        response = client.post(
            "/v1/orders/",
            json={"customer_id": str(uuid4()), "order_number": "ORD-1"},
        )
        assert response.status_code == 404

    def test_duplicate_number(self, client, customer):
        payload = {"customer_id": customer["id"], "order_number": "ORD-1"}
        client.post("/v1/orders/", json=payload)
        assert client.post("/v1/orders/", json=payload).status_code == 409

    def test_status_update(self, client, customer):
        order = client.post(
            "/v1/orders/",
            json={"customer_id": customer["id"], "order_number": "ORD-1"},
        ).json()

        response = client.put(f"/v1/orders/{order['id']}/status", json={"status": "cancelled"})
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"

        response = client.put(f"/v1/orders/{uuid4()}/status", json={"status": "cancelled"})
        assert response.status_code == 404

    def test_customer_orders(self, client, customer):
        client.post("/v1/orders/", json={"customer_id": customer["id"], "order_number": "ORD-1"})
        client.post("/v1/orders/", json={"customer_id": customer["id"], "order_number": "ORD-2"})

        orders = client.get("/v1/customers/cust_1/orders").json()
        assert sorted(o["order_number"] for o in orders) == ["ORD-1", "ORD-2"]
        assert client.get("/v1/customers/missing/orders").status_code == 404
