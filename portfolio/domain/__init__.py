"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business rules
- interfaces.py: Repository contracts
- view.py: In-memory filter/sort/selection engine used by clients
- statistics.py: Portfolio ROI aggregates
"""

from .entities import (
    BatchResult,
    CustomLists,
    Domain,
    DomainStatus,
    Evaluation,
    ItemResult,
    Sale,
    SaleDetails,
    User,
)
from .interfaces import (
    IDomainRepository,
    IEvaluationRepository,
    ISaleRepository,
    ISettingsRepository,
    IUserRepository,
)

__all__ = [
    # Domain entities
    "BatchResult",
    "CustomLists",
    "Domain",
    "DomainStatus",
    "Evaluation",
    "ItemResult",
    "Sale",
    "SaleDetails",
    "User",
    # Repository interfaces
    "IDomainRepository",
    "IEvaluationRepository",
    "ISaleRepository",
    "ISettingsRepository",
    "IUserRepository",
]
