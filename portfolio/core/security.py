import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from portfolio.core.config import get_jwt_expiration_hours, is_production

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return the bcrypt hash stored for an account."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Unknown or malformed hashes never verify.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def get_jwt_secret_key():
    """Signing key for access tokens (``JWT_SECRET_KEY``).

    Raises:
        ValueError: in production when the key is a known default or shorter
            than 32 characters
    """
    secret = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me")

    if is_production():
        weak_secrets = ["dev-jwt-secret-change-me", "dev-secret-change-me", "secret123"]
        if secret in weak_secrets or len(secret) < 32:
            raise ValueError(
                "Production deployment requires strong JWT_SECRET_KEY (min 32 chars). "
                "Set JWT_SECRET_KEY environment variable."
            )

    return secret


JWT_ALGORITHM = "HS256"


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Sign ``data`` with an ``exp`` claim, ``JWT_EXPIRATION_HOURS`` ahead by default."""
    if expires_delta is None:
        expires_delta = timedelta(hours=get_jwt_expiration_hours())
    claims = {**data, "exp": datetime.now(timezone.utc) + expires_delta}
    return jwt.encode(claims, get_jwt_secret_key(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Claims of a valid token; None when the signature or expiry check fails."""
    try:
        return jwt.decode(token, get_jwt_secret_key(), algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None


def create_user_token(user_id: int, username: str, email: str) -> str:
    """Create a JWT token embedding the user's id, username and email."""
    token_data = {
        "sub": str(user_id),
        "username": username,
        "email": email,
        "type": "access",
    }
    return create_access_token(token_data)


def get_user_from_token(token: str) -> Optional[Dict[str, Any]]:
    """Extract the user claims from a JWT token.

    Returns:
        ``{"userId", "username", "email"}`` if valid, None otherwise
    """
    payload = decode_access_token(token)
    if payload is None:
        return None

    user_id = payload.get("sub")
    username = payload.get("username")
    if user_id is None or username is None:
        return None

    try:
        parsed_id = int(user_id)
    except (TypeError, ValueError):
        return None

    return {"userId": parsed_id, "username": username, "email": payload.get("email")}
