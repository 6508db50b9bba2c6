from flask import Blueprint, jsonify, request

from portfolio.core.auth_decorators import get_current_user, token_required
from portfolio.core.config import get_password_min_length
from portfolio.core.limiter_config import limiter
from portfolio.schemas import (
    AuthTokenResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from portfolio.services.user_service import UserService

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("10 per minute")
def login():
    """Username-or-email and password login.

    Expected JSON: {"username": str, "password": str}; ``username`` may be
    an email address.
    Returns: {"token": str, "user": {"id", "username", "email"}}
    """
    payload = LoginRequest.from_json(request.get_json(silent=True))
    token, user = UserService().login(payload.identifier, payload.password)
    return jsonify(
        AuthTokenResponse(token=token, user=UserResponse.from_domain(user)).to_dict()
    )


@auth_bp.route("/register", methods=["POST"])
@limiter.limit("5 per minute")
def register():
    """Create an account.

    Expected JSON: {"username": str, "email": str, "password": str}
    Returns 201 {"userId": int}; 409 USERNAME_TAKEN or EMAIL_TAKEN.
    """
    payload = RegisterRequest.from_json(
        request.get_json(silent=True), get_password_min_length()
    )
    user = UserService().register(payload.username, payload.email, payload.password)
    return jsonify({"userId": user.id}), 201


@auth_bp.route("/verify", methods=["GET"])
@token_required
def verify():
    return jsonify({"valid": True, "user": get_current_user()})


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """Tokens are stateless; the client discards its copy."""
    return jsonify({"message": "logged_out"})
