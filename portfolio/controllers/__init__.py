# Controllers package initialization
# Each module exposes one Flask blueprint

from .auth_controller import auth_bp
from .domain_controller import domain_bp
from .evaluation_controller import evaluation_bp
from .health_controller import health_bp
from .report_controller import report_bp
from .settings_controller import settings_bp

__all__ = [
    "auth_bp",
    "domain_bp",
    "evaluation_bp",
    "health_bp",
    "report_bp",
    "settings_bp",
]
