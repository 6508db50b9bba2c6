# Services package initialization
# Each service owns its transactions through a unit of work

from .domain_service import DomainService
from .evaluation_service import EvaluationService
from .report_service import ReportService
from .settings_service import SettingsService
from .user_service import UserService

__all__ = [
    "DomainService",
    "EvaluationService",
    "ReportService",
    "SettingsService",
    "UserService",
]
