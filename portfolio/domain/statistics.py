"""Portfolio ROI aggregates shown on the dashboard."""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable

from .entities import Domain, DomainStatus, Sale

_ZERO = Decimal("0")
_CENT = Decimal("0.01")


@dataclass
class PortfolioStatistics:
    total_purchased: Decimal = _ZERO
    total_sold: Decimal = _ZERO
    domain_count: int = 0
    status_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def profit(self) -> Decimal:
        return self.total_sold - self.total_purchased

    @property
    def roi(self) -> Decimal:
        """(sold - purchased) / purchased as a percentage; 0 with no cost."""
        if self.total_purchased <= 0:
            return _ZERO
        return (self.profit / self.total_purchased * 100).quantize(
            _CENT, rounding=ROUND_HALF_UP
        )

    @property
    def average_value(self) -> Decimal:
        if self.domain_count == 0:
            return _ZERO
        return (self.total_purchased / self.domain_count).quantize(
            _CENT, rounding=ROUND_HALF_UP
        )


def compute_statistics(
    domains: Iterable[Domain], sales: Iterable[Sale]
) -> PortfolioStatistics:
    """Aggregate purchase cost, sale proceeds and status counts."""
    stats = PortfolioStatistics(status_counts={status: 0 for status in DomainStatus.ALL})

    for domain in domains:
        stats.domain_count += 1
        stats.total_purchased += domain.purchase_price or _ZERO
        stats.status_counts[domain.status] = stats.status_counts.get(domain.status, 0) + 1

    for sale in sales:
        stats.total_sold += sale.selling_price or _ZERO

    return stats
