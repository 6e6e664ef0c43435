"""Tests for order_by parsing and list endpoint ordering."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.core.sorting import parse_order_by
from storefront.main import app
from storefront.models.tax_configuration import TaxConfiguration


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestParseOrderBy:
    def test_empty(self):
        assert parse_order_by(None, TaxConfiguration) == []
        assert parse_order_by("", TaxConfiguration) == []

    def test_multiple_terms(self):
        assert parse_order_by("priority:desc, code", TaxConfiguration) == [
            ("priority", "desc"),
            ("code", "asc"),
        ]

    def test_unknown_column_dropped(self):
        assert parse_order_by("nonexistent:desc,rate", TaxConfiguration) == [("rate", "asc")]

    def test_unknown_direction_is_ascending(self):
        assert parse_order_by("rate:sideways", TaxConfiguration) == [("rate", "asc")]


class TestListOrdering:
    def _create(self, client, code: str, rate: str, priority: int):
        client.post(
            "/v1/taxes/",
            json={"code": code, "name": code, "rate": rate, "priority": priority},
        )

    def test_order_by_rate(self, client):
        self._create(client, "B", "12", 1)
        self._create(client, "A", "18", 2)
        self._create(client, "C", "5", 3)

        response = client.get("/v1/taxes/", params={"order_by": "rate:desc"})
        rates = [Decimal(t["rate"]) for t in response.json()]
        assert rates == [Decimal("18"), Decimal("12"), Decimal("5")]

    def test_secondary_term_breaks_ties(self, client):
        self._create(client, "B", "18", 1)
        self._create(client, "A", "18", 1)
        self._create(client, "C", "5", 0)

        response = client.get("/v1/taxes/", params={"order_by": "priority:desc,code:asc"})
        assert [t["code"] for t in response.json()] == ["A", "B", "C"]

    def test_unknown_column_falls_back_to_default(self, client):
        self._create(client, "A", "18", 1)
        response = client.get("/v1/taxes/", params={"order_by": "nonexistent"})
        assert response.status_code == 200
        assert len(response.json()) == 1
