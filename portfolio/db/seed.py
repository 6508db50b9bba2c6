"""
Database seeding and initialization functions.

This module makes sure the data the application needs at startup exists:
the administrator account and the default custom lists. Every function is
idempotent and can be called on each boot.
"""

import logging

from portfolio.core.config import get_admin_credentials
from portfolio.services.settings_service import SettingsService
from portfolio.services.user_service import UserService

logger = logging.getLogger(__name__)


def ensure_admin_user() -> bool:
    """
    Create the administrator account from ADMIN_USERNAME, ADMIN_EMAIL and
    ADMIN_PASSWORD when it does not exist yet.

    Without ADMIN_PASSWORD nothing is created, so no account with a
    well-known password ever exists.
    """
    credentials = get_admin_credentials()
    if not credentials["password"]:
        logger.info(
            "Admin account not seeded (ADMIN_PASSWORD not set)",
            extra={"context": {"username": credentials["username"]}},
        )
        return False

    created = UserService().ensure_user(
        credentials["username"], credentials["email"], credentials["password"]
    )
    if created:
        logger.info(
            "Admin account created",
            extra={"context": {"username": credentials["username"]}},
        )
    return created


def ensure_default_settings() -> bool:
    created = SettingsService().ensure_defaults()
    if created:
        logger.info("Default custom lists stored")
    return created


def seed_all() -> None:
    ensure_admin_user()
    ensure_default_settings()
