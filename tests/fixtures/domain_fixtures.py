"""Domain payloads and entity factories shared by the tests."""

from datetime import date
from decimal import Decimal

import pytest

from portfolio.domain.entities import Domain


@pytest.fixture
def domain_payload():
    """A valid create payload using the French status label."""
    return {
        "name": "example.com",
        "registrar": "OVH",
        "category": "Tech",
        "purchaseDate": "2024-01-01",
        "expirationDate": "2025-01-01",
        "status": "actif",
        "purchasePrice": 10,
    }


@pytest.fixture
def sold_domain_payload(domain_payload):
    return {
        **domain_payload,
        "name": "sold.io",
        "status": "vendu",
        "saleDate": "2024-06-01",
        "sellingPrice": 500,
        "buyer": "Bob",
    }


@pytest.fixture
def make_domain():
    def _make(**overrides) -> Domain:
        values = {
            "id": 1,
            "name": "example.com",
            "registrar": "OVH",
            "category": "Tech",
            "purchase_date": date(2024, 1, 1),
            "expiration_date": date(2025, 1, 1),
            "status": "active",
            "purchase_price": Decimal("10"),
        }
        values.update(overrides)
        return Domain(**values)

    return _make


@pytest.fixture
def sample_domains(make_domain):
    return [
        make_domain(
            id=1,
            name="alpha.com",
            registrar="OVH",
            category="Tech",
            status="active",
            purchase_date=date(2023, 3, 1),
            expiration_date=date(2025, 3, 1),
            purchase_price=Decimal("12.00"),
        ),
        make_domain(
            id=2,
            name="Beta-Shop.fr",
            registrar="Gandi",
            category="E-commerce",
            status="sold",
            purchase_date=date(2022, 7, 15),
            expiration_date=date(2024, 7, 15),
            purchase_price=Decimal("8.50"),
        ),
        make_domain(
            id=3,
            name="gamma.io",
            registrar="OVH",
            category="Blog",
            status="expired",
            purchase_date=date(2021, 1, 10),
            expiration_date=date(2023, 1, 10),
            purchase_price=None,
        ),
        make_domain(
            id=4,
            name="shopfast.net",
            registrar="Namecheap",
            category="E-commerce",
            status="for-sale",
            purchase_date=date(2024, 2, 20),
            expiration_date=date(2026, 2, 20),
            purchase_price=Decimal("30.00"),
        ),
    ]
