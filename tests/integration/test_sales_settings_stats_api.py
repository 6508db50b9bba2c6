"""
Integration tests for the sales ledger, the custom lists settings and the
portfolio statistics endpoints.
"""

import pytest

from portfolio.domain.entities import (
    DEFAULT_CATEGORIES,
    DEFAULT_EVALUATION_TOOLS,
    DEFAULT_REGISTRARS,
)


@pytest.mark.api
@pytest.mark.auth
class TestSalesApi:
    def test_requires_token(self, client):
        response = client.get("/api/sales")

        assert response.status_code == 401
        assert response.get_json()["error"] == "UNAUTHORIZED"

    def test_rejects_invalid_token(self, client):
        response = client.get(
            "/api/sales", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 403
        assert response.get_json()["error"] == "FORBIDDEN"

    def test_lists_sales_with_domain_details(
        self, client, auth_headers, sold_domain_payload, domain_payload
    ):
        client.post("/api/domains", json=domain_payload)
        client.post("/api/domains", json=sold_domain_payload)

        sales = client.get("/api/sales", headers=auth_headers).get_json()

        assert [s["domainName"] for s in sales] == ["sold.io"]
        assert sales[0]["buyer"] == "Bob"


@pytest.mark.api
class TestSettingsApi:
    def test_defaults_are_seeded(self, client, auth_headers):
        response = client.get("/api/settings", headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json() == {
            "registrars": DEFAULT_REGISTRARS,
            "categories": DEFAULT_CATEGORIES,
            "evaluationTools": DEFAULT_EVALUATION_TOOLS,
        }

    def test_requires_token(self, client):
        assert client.get("/api/settings").status_code == 401
        assert client.put("/api/settings", json={}).status_code == 401

    def test_update_round_trips(self, client, auth_headers):
        document = {
            "registrars": ["OVH", " Gandi ", "OVH"],
            "categories": [],
            "evaluationTools": ["Sedo"],
            "theme": "dark",
        }

        response = client.put("/api/settings", json=document, headers=auth_headers)

        assert response.status_code == 200
        expected = {"registrars": ["OVH", "Gandi"], "categories": [], "evaluationTools": ["Sedo"]}
        assert response.get_json() == expected
        assert client.get("/api/settings", headers=auth_headers).get_json() == expected

    def test_non_list_value_is_400(self, client, auth_headers):
        response = client.put(
            "/api/settings", json={"registrars": "OVH"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.get_json()["field"] == "registrars"


@pytest.mark.api
class TestStatsApi:
    def test_empty_portfolio(self, client):
        stats = client.get("/api/stats").get_json()

        assert stats["totalPurchased"] == 0
        assert stats["roi"] == 0
        assert stats["domainCount"] == 0

    def test_roi_over_purchases_and_sales(
        self, client, domain_payload, sold_domain_payload
    ):
        client.post("/api/domains", json={**domain_payload, "purchasePrice": 40})
        client.post(
            "/api/domains", json={**sold_domain_payload, "purchasePrice": 60}
        )

        stats = client.get("/api/stats").get_json()

        assert stats["totalPurchased"] == 100.0
        assert stats["totalSold"] == 500.0
        assert stats["profit"] == 400.0
        assert stats["roi"] == 400.0
        assert stats["averageValue"] == 50.0
        assert stats["statusCounts"]["sold"] == 1
        assert stats["statusCounts"]["active"] == 1
