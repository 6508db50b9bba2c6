"""
Health controller - health check endpoint for monitoring.
"""

import logging

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from portfolio.db.session import get_engine

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/health")


def check_database() -> bool:
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(
            "Database connection failed",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return False


@health_bp.route("", methods=["GET"])
def health_check():
    """
    Report whether the service can reach its database.

    Returns:
        {"status": "healthy" | "unhealthy", "database": bool}

    Status codes:
        200: database reachable
        503: database unreachable

    Note:
        - No authentication required (monitoring endpoint)
    """
    database_ok = check_database()
    status = "healthy" if database_ok else "unhealthy"
    if not database_ok:
        logger.warning(
            f"Health check result: {status}",
            extra={"context": {"endpoint": "/health", "database": database_ok}},
        )
    return (
        jsonify({"status": status, "database": database_ok}),
        200 if database_ok else 503,
    )
