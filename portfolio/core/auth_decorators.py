"""
Authentication helpers for this application.

The API is authenticated with a stateless JWT Bearer token issued by
``POST /api/auth/login``:

- Missing ``Authorization: Bearer <token>`` header -> 401
- Token that fails verification or has expired   -> 403
- Valid token -> claims stored on ``flask.g.current_user``

Example:
    @sales_bp.route("", methods=["GET"])
    @token_required
    def list_sales():
        user = get_current_user()
        ...
"""

from functools import wraps
from typing import Any, Dict, Optional

from flask import g, request

from portfolio.core.exceptions import ForbiddenError, UnauthorizedError
from portfolio.core.security import get_user_from_token


def get_current_user() -> Optional[Dict[str, Any]]:
    """Return the claims of the authenticated caller, if any."""
    return getattr(g, "current_user", None)


def extract_bearer_token() -> Optional[str]:
    """Return the raw token from the Authorization header, or None."""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def token_required(f):
    """Decorator to require JWT authentication for API endpoints."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = extract_bearer_token()
        if token is None:
            raise UnauthorizedError("Authentication token required")

        user_data = get_user_from_token(token)
        if user_data is None:
            raise ForbiddenError("Invalid or expired token")

        g.current_user = user_data
        return f(*args, **kwargs)

    return decorated_function
