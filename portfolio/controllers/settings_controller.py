from flask import Blueprint, jsonify, request

from portfolio.core.auth_decorators import token_required
from portfolio.schemas import CustomListsRequest, custom_lists_to_dict
from portfolio.services.settings_service import SettingsService

settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@settings_bp.route("", methods=["GET"])
@token_required
def get_settings():
    return jsonify(custom_lists_to_dict(SettingsService().get_custom_lists()))


@settings_bp.route("", methods=["PUT"])
@token_required
def update_settings():
    """Replace the custom lists document and echo what was stored.

    Expected JSON: {"registrars": [str], "categories": [str],
    "evaluationTools": [str]}; unknown keys are dropped.
    """
    payload = CustomListsRequest.from_json(request.get_json(silent=True))
    stored = SettingsService().update_custom_lists(payload.custom_lists)
    return jsonify(custom_lists_to_dict(stored))
