"""Domain repository implementation.

Maps between ``domains`` rows and Domain entities. Methods flush so
generated ids are available, but the surrounding unit of work decides
whether the changes are committed.
"""

from typing import List, Optional

from portfolio.db.base import Domain as DbDomain
from portfolio.domain.entities import Domain as DomainEntity
from portfolio.domain.interfaces import IDomainRepository


class DomainRepository(IDomainRepository):
    """Repository for Domain persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_all(self) -> List[DomainEntity]:
        db_domains = self.db.query(DbDomain).order_by(DbDomain.id.desc()).all()
        return [self._to_domain(d) for d in db_domains]

    def get_by_id(self, domain_id: int) -> Optional[DomainEntity]:
        db_domain = self.db.get(DbDomain, domain_id)
        return self._to_domain(db_domain) if db_domain else None

    def get_by_name(self, name: str) -> Optional[DomainEntity]:
        db_domain = self.db.query(DbDomain).filter(DbDomain.name == name).first()
        return self._to_domain(db_domain) if db_domain else None

    def add(self, domain: DomainEntity) -> DomainEntity:
        db_domain = DbDomain()
        self._apply(db_domain, domain)
        self.db.add(db_domain)
        self.db.flush()
        return self._to_domain(db_domain)

    def update(self, domain: DomainEntity) -> Optional[DomainEntity]:
        if not domain.id:
            raise ValueError("Domain ID is required for update")

        db_domain = self.db.get(DbDomain, domain.id)
        if db_domain is None:
            return None

        self._apply(db_domain, domain)
        self.db.flush()
        return self._to_domain(db_domain)

    def delete(self, domain_id: int) -> bool:
        deleted = (
            self.db.query(DbDomain)
            .filter(DbDomain.id == domain_id)
            .delete(synchronize_session=False)
        )
        return deleted > 0

    @staticmethod
    def _apply(db_domain: DbDomain, domain: DomainEntity) -> None:
        db_domain.name = domain.name
        db_domain.registrar = domain.registrar
        db_domain.category = domain.category
        db_domain.purchase_date = domain.purchase_date
        db_domain.expiration_date = domain.expiration_date
        db_domain.status = domain.status
        db_domain.purchase_price = domain.purchase_price

    @staticmethod
    def _to_domain(db_domain: DbDomain) -> DomainEntity:
        """Convert database model to domain entity."""
        return DomainEntity(
            id=db_domain.id,
            name=db_domain.name,
            registrar=db_domain.registrar,
            category=db_domain.category,
            purchase_date=db_domain.purchase_date,
            expiration_date=db_domain.expiration_date,
            status=db_domain.status,
            purchase_price=db_domain.purchase_price,
        )
