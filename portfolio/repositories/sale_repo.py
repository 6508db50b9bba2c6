from typing import List, Optional

from portfolio.db.base import Domain as DbDomain
from portfolio.db.base import Sale as DbSale
from portfolio.domain.entities import Sale as DomainSale
from portfolio.domain.interfaces import ISaleRepository


class SaleRepository(ISaleRepository):
    """Repository for Sale persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_all_with_domains(self) -> List[DomainSale]:
        """Sales joined to their domain; orphaned sales are excluded."""
        rows = (
            self.db.query(DbSale, DbDomain)
            .join(DbDomain, DbSale.domain_id == DbDomain.id)
            .order_by(DbSale.id)
            .all()
        )
        return [self._to_domain(sale, domain) for sale, domain in rows]

    def get_by_domain_id(self, domain_id: int) -> Optional[DomainSale]:
        db_sale = self.db.query(DbSale).filter(DbSale.domain_id == domain_id).first()
        return self._to_domain(db_sale) if db_sale else None

    def add(self, sale: DomainSale) -> DomainSale:
        db_sale = DbSale(
            domain_id=sale.domain_id,
            sale_date=sale.sale_date,
            selling_price=sale.selling_price,
            buyer=sale.buyer,
        )
        self.db.add(db_sale)
        self.db.flush()
        return self._to_domain(db_sale)

    def delete_for_domain(self, domain_id: int) -> int:
        return (
            self.db.query(DbSale)
            .filter(DbSale.domain_id == domain_id)
            .delete(synchronize_session=False)
        )

    @staticmethod
    def _to_domain(db_sale: DbSale, db_domain: Optional[DbDomain] = None) -> DomainSale:
        return DomainSale(
            id=db_sale.id,
            domain_id=db_sale.domain_id,
            sale_date=db_sale.sale_date,
            selling_price=db_sale.selling_price,
            buyer=db_sale.buyer,
            domain_name=db_domain.name if db_domain else None,
            registrar=db_domain.registrar if db_domain else None,
            category=db_domain.category if db_domain else None,
        )
