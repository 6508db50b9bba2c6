"""
Custom exceptions for the application.

Services raise these; ``register_error_handlers`` turns them into JSON
responses of the shape ``{"error": <code>, "message": <text>}``.
"""

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class PortfolioError(Exception):
    """Base class for errors that map to a client-facing HTTP response."""

    status_code = 500
    code = "SERVER_ERROR"

    def __init__(self, message: str, code: str | None = None, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        payload = {"error": self.code, "message": self.message}
        if self.field:
            payload["field"] = self.field
        return payload


class ValidationError(PortfolioError):
    """Missing or malformed input."""

    status_code = 400
    code = "VALIDATION_ERROR"


class ConflictError(PortfolioError):
    """Uniqueness violation (duplicate domain name, username, email)."""

    status_code = 409
    code = "CONFLICT"


class UnauthorizedError(PortfolioError):
    """No credentials supplied."""

    status_code = 401
    code = "UNAUTHORIZED"


class InvalidCredentialsError(UnauthorizedError):
    code = "INVALID_CREDENTIALS"


class ForbiddenError(PortfolioError):
    """Credentials supplied but invalid or expired."""

    status_code = 403
    code = "FORBIDDEN"


def error_response(error: PortfolioError):
    return jsonify(error.to_dict()), error.status_code


def register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers on the Flask app."""

    @app.errorhandler(PortfolioError)
    def handle_portfolio_error(error: PortfolioError):
        logger.info(
            "Request rejected",
            extra={
                "context": {
                    "error": error.code,
                    "status_code": error.status_code,
                    "message": error.message,
                }
            },
        )
        return error_response(error)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        code = (error.name or "HTTP_ERROR").upper().replace(" ", "_")
        return (
            jsonify({"error": code, "message": error.description}),
            error.code or 500,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        # Details stay in the server log only.
        logger.error(
            "Unhandled error while processing request",
            extra={"context": {"error": str(error), "type": type(error).__name__}},
            exc_info=True,
        )
        return (
            jsonify({"error": "SERVER_ERROR", "message": "Internal server error"}),
            500,
        )
