"""
Abstract interfaces for repositories following Interface Segregation Principle.

Repositories work inside a unit of work owned by the service layer: they
add, flush and query, but never commit or roll back.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities import Domain, Evaluation, Sale, User


class IDomainReader(ABC):
    """Interface for domain read operations."""

    @abstractmethod
    def get_all(self) -> List[Domain]:
        """Get all domains, newest first."""
        pass

    @abstractmethod
    def get_by_id(self, domain_id: int) -> Optional[Domain]:
        """Get domain by ID."""
        pass

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Domain]:
        """Get domain by exact (case-sensitive) name."""
        pass


class IDomainWriter(ABC):
    """Interface for domain write operations."""

    @abstractmethod
    def add(self, domain: Domain) -> Domain:
        """Insert a domain and return it with its generated id."""
        pass

    @abstractmethod
    def update(self, domain: Domain) -> Optional[Domain]:
        """Update a domain in place; None when the id does not exist."""
        pass

    @abstractmethod
    def delete(self, domain_id: int) -> bool:
        """Delete a domain; False when the id does not exist."""
        pass


class IDomainRepository(IDomainReader, IDomainWriter):
    """Complete domain repository interface."""

    pass


class ISaleRepository(ABC):
    """Interface for sale operations."""

    @abstractmethod
    def get_all_with_domains(self) -> List[Sale]:
        """Get all sales joined to their owning domain."""
        pass

    @abstractmethod
    def get_by_domain_id(self, domain_id: int) -> Optional[Sale]:
        pass

    @abstractmethod
    def add(self, sale: Sale) -> Sale:
        pass

    @abstractmethod
    def delete_for_domain(self, domain_id: int) -> int:
        """Delete the sale of a domain; returns the number of rows removed."""
        pass


class IEvaluationRepository(ABC):
    """Interface for evaluation operations."""

    @abstractmethod
    def get_all(self) -> List[Evaluation]:
        pass

    @abstractmethod
    def add(self, evaluation: Evaluation) -> Evaluation:
        pass

    @abstractmethod
    def delete(self, evaluation_id: int) -> bool:
        pass

    @abstractmethod
    def delete_for_domain(self, domain_id: int) -> int:
        """Delete every evaluation of a domain; returns the number removed."""
        pass


class ISettingsRepository(ABC):
    """Interface for the key/value settings store."""

    @abstractmethod
    def get_value(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def put_value(self, key: str, value: str) -> None:
        """Insert or replace the value stored under ``key``."""
        pass


class IUserRepository(ABC):
    """Interface for user persistence."""

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_credentials(self, identifier: str) -> Optional[tuple[User, str]]:
        """Look up a user by username or email and return it with its hash."""
        pass

    @abstractmethod
    def create(self, user: User, password_hash: str) -> User:
        pass
