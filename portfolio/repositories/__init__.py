# Repositories package initialization
# Concrete SQLAlchemy implementations of the domain interfaces

from .domain_repo import DomainRepository
from .evaluation_repo import EvaluationRepository
from .sale_repo import SaleRepository
from .settings_repo import SettingsRepository
from .user_repo import UserRepository

__all__ = [
    "DomainRepository",
    "EvaluationRepository",
    "SaleRepository",
    "SettingsRepository",
    "UserRepository",
]
