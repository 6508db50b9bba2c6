"""
Integration tests for the domain endpoints using Flask test client.

Each test runs against a fresh in-memory SQLite database, so the sale
table can be checked directly through the sales endpoint.
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from portfolio.repositories.domain_repo import DomainRepository
from portfolio.repositories.sale_repo import SaleRepository


def _sales(client, auth_headers):
    response = client.get("/api/sales", headers=auth_headers)
    assert response.status_code == 200
    return response.get_json()


@pytest.mark.api
class TestDomainCrud:
    def test_create_then_list(self, client, domain_payload):
        response = client.post("/api/domains", json=domain_payload)

        assert response.status_code == 201
        created = response.get_json()
        assert created["id"] > 0
        assert created["status"] == "active"
        assert created["purchasePrice"] == 10.0

        listing = client.get("/api/domains").get_json()
        assert listing == [created]

    def test_list_is_newest_first(self, client, domain_payload):
        for name in ("first.com", "second.com", "third.com"):
            client.post("/api/domains", json={**domain_payload, "name": name})

        names = [d["name"] for d in client.get("/api/domains").get_json()]

        assert names == ["third.com", "second.com", "first.com"]

    def test_duplicate_name_is_409(self, client, domain_payload):
        client.post("/api/domains", json=domain_payload)

        response = client.post("/api/domains", json=domain_payload)

        assert response.status_code == 409
        assert response.get_json()["error"] == "DUPLICATE_DOMAIN"
        assert len(client.get("/api/domains").get_json()) == 1

    def test_names_are_case_sensitive(self, client, domain_payload):
        client.post("/api/domains", json=domain_payload)

        response = client.post(
            "/api/domains", json={**domain_payload, "name": "Example.com"}
        )

        assert response.status_code == 201

    def test_missing_field_is_400(self, client, domain_payload):
        payload = dict(domain_payload)
        del payload["registrar"]

        response = client.post("/api/domains", json=payload)

        assert response.status_code == 400
        body = response.get_json()
        assert body["error"] == "VALIDATION_ERROR"
        assert "registrar" in body["message"]

    def test_non_json_body_is_400(self, client):
        response = client.post("/api/domains", data="name=x", content_type="text/plain")

        assert response.status_code == 400

    def test_update(self, client, domain_payload):
        domain_id = client.post("/api/domains", json=domain_payload).get_json()["id"]

        response = client.put(
            f"/api/domains/{domain_id}",
            json={**domain_payload, "category": "Blog", "purchasePrice": None},
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["category"] == "Blog"
        assert body["purchasePrice"] is None
        assert client.get("/api/domains").get_json()[0]["category"] == "Blog"

    def test_rename_onto_existing_name_is_409(self, client, domain_payload):
        client.post("/api/domains", json=domain_payload)
        other_id = client.post(
            "/api/domains", json={**domain_payload, "name": "other.com"}
        ).get_json()["id"]

        response = client.put(f"/api/domains/{other_id}", json=domain_payload)

        assert response.status_code == 409

    def test_update_unknown_id_echoes_payload(self, client, domain_payload):
        response = client.put("/api/domains/999", json=domain_payload)

        assert response.status_code == 200
        assert response.get_json()["id"] == 999
        assert client.get("/api/domains").get_json() == []

    def test_delete_is_idempotent(self, client, domain_payload):
        domain_id = client.post("/api/domains", json=domain_payload).get_json()["id"]

        assert client.delete(f"/api/domains/{domain_id}").status_code == 204
        assert client.delete(f"/api/domains/{domain_id}").status_code == 204
        assert client.get("/api/domains").get_json() == []

    def test_price_is_stored_to_the_cent(self, client, domain_payload):
        response = client.post(
            "/api/domains", json={**domain_payload, "purchasePrice": "15.999"}
        )

        assert response.status_code == 201
        assert response.get_json()["purchasePrice"] == 16.0
        assert client.get("/api/domains").get_json()[0]["purchasePrice"] == 16.0

    def test_price_too_large_for_the_column_is_400(self, client, domain_payload):
        response = client.post(
            "/api/domains", json={**domain_payload, "purchasePrice": 1e11}
        )

        assert response.status_code == 400
        assert response.get_json()["field"] == "purchasePrice"
        assert client.get("/api/domains").get_json() == []


@pytest.mark.api
class TestSaleLifecycle:
    def test_sold_domain_creates_sale(self, client, auth_headers, sold_domain_payload):
        created = client.post("/api/domains", json=sold_domain_payload).get_json()

        assert created["status"] == "sold"
        assert _sales(client, auth_headers) == [
            {
                "id": 1,
                "domainId": created["id"],
                "domainName": "sold.io",
                "saleDate": "2024-06-01",
                "sellingPrice": 500.0,
                "buyer": "Bob",
                "registrar": "OVH",
                "category": "Tech",
            }
        ]

    def test_sold_without_price_has_no_sale(
        self, client, auth_headers, sold_domain_payload
    ):
        payload = dict(sold_domain_payload)
        del payload["sellingPrice"]

        assert client.post("/api/domains", json=payload).status_code == 201
        assert _sales(client, auth_headers) == []

    def test_update_replaces_sale_row(self, client, auth_headers, sold_domain_payload):
        domain_id = client.post("/api/domains", json=sold_domain_payload).get_json()["id"]

        client.put(
            f"/api/domains/{domain_id}",
            json={**sold_domain_payload, "sellingPrice": 750},
        )

        sales = _sales(client, auth_headers)
        assert len(sales) == 1
        assert sales[0]["sellingPrice"] == 750.0

    def test_update_away_from_sold_removes_sale(
        self, client, auth_headers, sold_domain_payload
    ):
        domain_id = client.post("/api/domains", json=sold_domain_payload).get_json()["id"]

        client.put(
            f"/api/domains/{domain_id}",
            json={**sold_domain_payload, "status": "for-sale"},
        )

        assert _sales(client, auth_headers) == []

    def test_delete_removes_sale_and_evaluations(
        self, client, auth_headers, sold_domain_payload
    ):
        domain_id = client.post("/api/domains", json=sold_domain_payload).get_json()["id"]
        client.post(
            "/api/evaluations",
            json={
                "domainId": domain_id,
                "tool": "Estibot",
                "date": "2024-03-01",
                "estimatedValue": 300,
            },
        )

        assert client.delete(f"/api/domains/{domain_id}").status_code == 204

        assert _sales(client, auth_headers) == []
        assert client.get("/api/evaluations").get_json() == []


@pytest.mark.api
class TestConcurrentNameClash:
    """The unique index still yields a 409 when the pre-check misses a clash."""

    def test_create_with_taken_name(self, client, domain_payload):
        assert client.post("/api/domains", json=domain_payload).status_code == 201

        with patch.object(DomainRepository, "get_by_name", return_value=None):
            response = client.post("/api/domains", json=domain_payload)

        assert response.status_code == 409
        assert response.get_json()["error"] == "DUPLICATE_DOMAIN"
        assert len(client.get("/api/domains").get_json()) == 1

    def test_rename_onto_taken_name(self, client, domain_payload):
        client.post("/api/domains", json=domain_payload)
        other_id = client.post(
            "/api/domains", json={**domain_payload, "name": "other.com"}
        ).get_json()["id"]

        with patch.object(DomainRepository, "get_by_name", return_value=None):
            response = client.put(f"/api/domains/{other_id}", json=domain_payload)

        assert response.status_code == 409
        assert response.get_json()["error"] == "DUPLICATE_DOMAIN"
        names = sorted(d["name"] for d in client.get("/api/domains").get_json())
        assert names == ["example.com", "other.com"]


@pytest.mark.api
class TestWriteAtomicity:
    """A failed sale insert leaves the domain table untouched."""

    @staticmethod
    def _failing_sale_insert():
        return patch.object(
            SaleRepository,
            "add",
            side_effect=OperationalError("INSERT INTO sales", {}, Exception("disk full")),
        )

    def test_create_is_rolled_back(self, client, auth_headers, sold_domain_payload):
        with self._failing_sale_insert():
            response = client.post("/api/domains", json=sold_domain_payload)

        assert response.status_code == 500
        assert response.get_json()["error"] == "SERVER_ERROR"
        assert client.get("/api/domains").get_json() == []
        assert _sales(client, auth_headers) == []

    def test_update_is_rolled_back(
        self, client, auth_headers, domain_payload, sold_domain_payload
    ):
        before = client.post("/api/domains", json=domain_payload).get_json()

        with self._failing_sale_insert():
            response = client.put(
                f"/api/domains/{before['id']}", json=sold_domain_payload
            )

        assert response.status_code == 500
        assert client.get("/api/domains").get_json() == [before]
        assert _sales(client, auth_headers) == []

    def test_update_keeps_previous_sale(self, client, auth_headers, sold_domain_payload):
        domain_id = client.post("/api/domains", json=sold_domain_payload).get_json()["id"]

        with self._failing_sale_insert():
            response = client.put(
                f"/api/domains/{domain_id}",
                json={**sold_domain_payload, "sellingPrice": 750},
            )

        assert response.status_code == 500
        sales = _sales(client, auth_headers)
        assert len(sales) == 1
        assert sales[0]["sellingPrice"] == 500.0
