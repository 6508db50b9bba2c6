from datetime import date
from decimal import Decimal

from portfolio.domain.entities import Sale
from portfolio.domain.statistics import PortfolioStatistics, compute_statistics


def _sale(domain_id, price):
    return Sale(domain_id=domain_id, sale_date=date(2024, 6, 1), selling_price=Decimal(price))


def test_totals_profit_and_roi(make_domain):
    domains = [
        make_domain(id=1, purchase_price=Decimal("100")),
        make_domain(id=2, name="b.com", purchase_price=Decimal("50"), status="sold"),
    ]
    stats = compute_statistics(domains, [_sale(2, "300")])

    assert stats.total_purchased == Decimal("150")
    assert stats.total_sold == Decimal("300")
    assert stats.profit == Decimal("150")
    assert stats.roi == Decimal("100.00")
    assert stats.average_value == Decimal("75.00")
    assert stats.domain_count == 2


def test_roi_is_zero_when_nothing_was_purchased(make_domain):
    stats = compute_statistics([make_domain(purchase_price=None)], [_sale(1, "10")])

    assert stats.total_purchased == Decimal("0")
    assert stats.roi == Decimal("0")


def test_negative_roi_is_rounded_to_cents(make_domain):
    stats = compute_statistics(
        [make_domain(purchase_price=Decimal("3"))], [_sale(1, "1")]
    )

    assert stats.roi == Decimal("-66.67")


def test_status_counts_include_every_status(make_domain):
    stats = compute_statistics(
        [make_domain(id=1), make_domain(id=2, name="x.fr", status="expired")], []
    )

    assert stats.status_counts == {"active": 1, "sold": 0, "expired": 1, "for-sale": 0}


def test_empty_portfolio():
    stats = compute_statistics([], [])

    assert stats == PortfolioStatistics(
        status_counts={"active": 0, "sold": 0, "expired": 0, "for-sale": 0}
    )
    assert stats.average_value == Decimal("0")
