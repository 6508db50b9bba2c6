"""
Centralized configuration module for application-wide settings.

Every setting is read from the environment (optionally populated from a
``.env`` file by ``python-dotenv`` in ``main.create_app``) through a small
getter so tests can change the environment and call the getter again.
"""

import logging
import os

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes")


def _get_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            f"Invalid integer for {name}, falling back to default",
            extra={"context": {"name": name, "value": raw, "default": default}},
        )
        return default


# ===========================
# Environment
# ===========================


def get_environment() -> str:
    """Return the deployment environment name (``FLASK_ENV``)."""
    return os.getenv("FLASK_ENV", "development")


def is_production() -> bool:
    return get_environment() == "production"


def is_testing() -> bool:
    """True when running under pytest or with TESTING set."""
    return _get_bool("TESTING", "false")


# ===========================
# Database Configuration
# ===========================

DEFAULT_DATABASE_URL = "sqlite:///./portfolio.db"


def get_database_url() -> str:
    return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


def slow_query_alerts_enabled() -> bool:
    return _get_bool("ALERT_SLOW_QUERY_ENABLED", "true")


def get_slow_query_threshold_ms() -> int:
    """Statements slower than this many milliseconds are logged as warnings."""
    return _get_int("ALERT_QUERY_MS_THRESHOLD", 100)


# ===========================
# Authentication Configuration
# ===========================


def get_jwt_expiration_hours() -> int:
    """
    Get the lifetime of issued access tokens in hours.

    Environment Variables:
        JWT_EXPIRATION_HOURS: Token lifetime. Default: 24
    """
    hours = _get_int("JWT_EXPIRATION_HOURS", 24)
    return hours if hours > 0 else 24


def get_password_min_length() -> int:
    """Minimum password length accepted at registration."""
    return _get_int("PASSWORD_MIN_LENGTH", 6)


def get_admin_credentials() -> dict:
    """
    Get the credentials of the account seeded at bootstrap.

    Environment Variables:
        ADMIN_USERNAME: Default 'admin'
        ADMIN_EMAIL: Default 'admin@example.com'
        ADMIN_PASSWORD: No default; seeding is skipped when unset
    """
    return {
        "username": os.getenv("ADMIN_USERNAME", "admin"),
        "email": os.getenv("ADMIN_EMAIL", "admin@example.com"),
        "password": os.getenv("ADMIN_PASSWORD") or None,
    }


# ===========================
# HTTP Configuration
# ===========================


def get_cors_origins() -> list[str] | str:
    """
    Get the origins allowed to call the API.

    Environment Variables:
        CORS_ORIGINS: Comma-separated list of origins, or '*' (default)
    """
    raw = os.getenv("CORS_ORIGINS", "*").strip()
    if raw == "*" or not raw:
        return "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_rate_limit_enabled() -> bool:
    return _get_bool("RATE_LIMIT_ENABLED", "1")


# ===========================
# Client Configuration
# ===========================


def get_api_url() -> str:
    """Base URL used by the command line client."""
    return os.getenv("PORTFOLIO_API_URL", "http://localhost:5000/api").rstrip("/")


def get_api_token() -> str | None:
    return os.getenv("PORTFOLIO_API_TOKEN") or None


def log_config():
    """
    Log the active configuration.

    Should be called during application startup to provide visibility
    into the settings in use (without exposing secrets).
    """
    logger.info(
        "Configuration initialized",
        extra={
            "context": {
                "environment": get_environment(),
                "jwt_expiration_hours": get_jwt_expiration_hours(),
                "password_min_length": get_password_min_length(),
                "cors_origins": get_cors_origins(),
                "rate_limit_enabled": get_rate_limit_enabled(),
                "slow_query_threshold_ms": get_slow_query_threshold_ms(),
            }
        },
    )
