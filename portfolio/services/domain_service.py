"""
Domain service: the write path for domains and their sale.

Every public method runs in its own unit of work, so a domain row and its
sale are always written or rolled back together. Batch methods open one
unit of work per item and report each outcome separately.
"""

import logging
from dataclasses import replace
from typing import Any, Callable, ContextManager, Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from portfolio.core.exceptions import ConflictError, PortfolioError
from portfolio.domain.entities import (
    BatchResult,
    Domain,
    DomainStatus,
    Sale,
    SaleDetails,
    requires_sale,
)
from portfolio.services.unit_of_work import UnitOfWork, unit_of_work

logger = logging.getLogger(__name__)

DUPLICATE_DOMAIN = "DUPLICATE_DOMAIN"


def _duplicate(name: str) -> ConflictError:
    return ConflictError(f"Domain {name} already exists", code=DUPLICATE_DOMAIN)


class DomainService:
    """Application service for domain use-cases."""

    def __init__(
        self, uow_factory: Callable[[], ContextManager[UnitOfWork]] = unit_of_work
    ) -> None:
        self.uow_factory = uow_factory

    def list_domains(self) -> List[Domain]:
        """All domains, newest first."""
        with self.uow_factory() as uow:
            return uow.domains.get_all()

    def create(self, domain: Domain, sale: Optional[SaleDetails] = None) -> Domain:
        """Insert a domain and, when it is sold, its sale.

        Raises:
            ConflictError: another domain already uses the name
        """
        try:
            with self.uow_factory() as uow:
                if uow.domains.get_by_name(domain.name) is not None:
                    raise _duplicate(domain.name)
                try:
                    created = uow.domains.add(replace(domain, id=None))
                except IntegrityError as exc:
                    # Same name inserted concurrently, caught by the unique index
                    raise _duplicate(domain.name) from exc
                self._write_sale(uow, created, sale)
        except SQLAlchemyError:
            logger.error(
                "Failed to create domain",
                extra={"context": {"name": domain.name}},
                exc_info=True,
            )
            raise

        logger.info(
            "Domain created",
            extra={
                "context": {
                    "domain_id": created.id,
                    "name": created.name,
                    "status": created.status,
                }
            },
        )
        return created

    def update(
        self, domain_id: int, domain: Domain, sale: Optional[SaleDetails] = None
    ) -> Domain:
        """Replace a domain's fields and recompute its sale.

        The previous sale is always removed; a new one is inserted when the
        domain is saved as sold with a sale date and price. An unknown id
        changes nothing and the submitted values are returned as-is.
        """
        try:
            with self.uow_factory() as uow:
                existing = uow.domains.get_by_id(domain_id)
                if existing is None:
                    logger.info(
                        "Update of unknown domain ignored",
                        extra={"context": {"domain_id": domain_id}},
                    )
                    return replace(domain, id=domain_id)
                updated = self._save(uow, existing, replace(domain, id=domain_id), sale)
        except SQLAlchemyError:
            logger.error(
                "Failed to update domain",
                extra={"context": {"domain_id": domain_id}},
                exc_info=True,
            )
            raise

        logger.info(
            "Domain updated",
            extra={"context": {"domain_id": domain_id, "status": updated.status}},
        )
        return updated

    def delete(self, domain_id: int) -> bool:
        """Delete a domain with its evaluations and sale.

        Returns False when the id did not exist; that is not an error.
        """
        try:
            with self.uow_factory() as uow:
                evaluations = uow.evaluations.delete_for_domain(domain_id)
                sales = uow.sales.delete_for_domain(domain_id)
                deleted = uow.domains.delete(domain_id)
        except SQLAlchemyError:
            logger.error(
                "Failed to delete domain",
                extra={"context": {"domain_id": domain_id}},
                exc_info=True,
            )
            raise

        logger.info(
            "Domain deleted" if deleted else "Delete of unknown domain ignored",
            extra={
                "context": {
                    "domain_id": domain_id,
                    "evaluations_removed": evaluations,
                    "sales_removed": sales,
                }
            },
        )
        return deleted

    def bulk_delete(self, ids: Iterable[int]) -> BatchResult:
        """Delete each id in its own transaction."""
        return self._run_batch("delete", ids, self.delete)

    def bulk_update(
        self,
        ids: Iterable[int],
        changes: Dict[str, Any],
        sale: Optional[SaleDetails] = None,
    ) -> BatchResult:
        """Apply the same partial change to each id in its own transaction.

        ``changes`` may hold ``status``, ``registrar`` and ``category``. A
        domain that stays sold keeps its current sale unless new sale
        details are supplied.
        """
        return self._run_batch(
            "update", ids, lambda domain_id: self._apply_changes(domain_id, changes, sale)
        )

    def _apply_changes(
        self, domain_id: int, changes: Dict[str, Any], sale: Optional[SaleDetails]
    ) -> Domain:
        with self.uow_factory() as uow:
            existing = uow.domains.get_by_id(domain_id)
            if existing is None:
                raise PortfolioError("Domain not found", code="NOT_FOUND")

            if sale is None and changes.get("status", existing.status) == DomainStatus.SOLD:
                current = uow.sales.get_by_domain_id(domain_id)
                if current is not None:
                    sale = SaleDetails(
                        sale_date=current.sale_date,
                        selling_price=current.selling_price,
                        buyer=current.buyer,
                    )

            return self._save(uow, existing, replace(existing, **changes), sale)

    def _run_batch(
        self, operation: str, ids: Iterable[int], action: Callable[[int], Any]
    ) -> BatchResult:
        result = BatchResult()
        for domain_id in ids:
            try:
                action(domain_id)
            except PortfolioError as exc:
                result.add_failure(domain_id, exc.message)
            except ValueError as exc:
                result.add_failure(domain_id, str(exc))
            except SQLAlchemyError:
                logger.warning(
                    f"Bulk {operation} item failed",
                    extra={"context": {"domain_id": domain_id}},
                    exc_info=True,
                )
                result.add_failure(domain_id, "Database error")
            else:
                result.add_success(domain_id)

        logger.info(
            f"Bulk {operation} finished",
            extra={
                "context": {
                    "requested": len(result.results),
                    "succeeded": len(result.succeeded),
                    "failed": len(result.failed),
                }
            },
        )
        return result

    def _save(
        self,
        uow: UnitOfWork,
        existing: Domain,
        domain: Domain,
        sale: Optional[SaleDetails],
    ) -> Domain:
        if domain.name != existing.name:
            other = uow.domains.get_by_name(domain.name)
            if other is not None and other.id != existing.id:
                raise _duplicate(domain.name)

        try:
            updated = uow.domains.update(domain)
        except IntegrityError as exc:
            raise _duplicate(domain.name) from exc
        uow.sales.delete_for_domain(existing.id)
        self._write_sale(uow, updated, sale)
        return updated

    @staticmethod
    def _write_sale(
        uow: UnitOfWork, domain: Domain, sale: Optional[SaleDetails]
    ) -> Optional[Sale]:
        if not requires_sale(domain, sale):
            return None
        return uow.sales.add(
            Sale(
                domain_id=domain.id,
                sale_date=sale.sale_date,
                selling_price=sale.selling_price,
                buyer=sale.buyer,
            )
        )
