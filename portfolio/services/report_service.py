"""Read-only projections: the sales ledger and the ROI statistics."""

from typing import Callable, ContextManager, List

from portfolio.domain.entities import Sale
from portfolio.domain.statistics import PortfolioStatistics, compute_statistics
from portfolio.services.unit_of_work import UnitOfWork, unit_of_work


class ReportService:
    def __init__(
        self, uow_factory: Callable[[], ContextManager[UnitOfWork]] = unit_of_work
    ) -> None:
        self.uow_factory = uow_factory

    def list_sales(self) -> List[Sale]:
        """Sales joined with the name, registrar and category of their domain."""
        with self.uow_factory() as uow:
            return uow.sales.get_all_with_domains()

    def get_statistics(self) -> PortfolioStatistics:
        with self.uow_factory() as uow:
            domains = uow.domains.get_all()
            sales = uow.sales.get_all_with_domains()
        return compute_statistics(domains, sales)
