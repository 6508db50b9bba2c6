from flask import Blueprint, jsonify, request

from portfolio.schemas import EvaluationCreateRequest, EvaluationResponse
from portfolio.services.evaluation_service import EvaluationService

evaluation_bp = Blueprint("evaluations", __name__, url_prefix="/api/evaluations")


@evaluation_bp.route("", methods=["GET"])
def list_evaluations():
    evaluations = EvaluationService().list_evaluations()
    return jsonify([EvaluationResponse.from_domain(e).to_dict() for e in evaluations])


@evaluation_bp.route("", methods=["POST"])
def create_evaluation():
    """Record a value estimate.

    Expected JSON: {"domainId": int, "tool": str, "date": "YYYY-MM-DD",
    "estimatedValue": number}
    """
    payload = EvaluationCreateRequest.from_json(request.get_json(silent=True))
    created = EvaluationService().create(payload.evaluation)
    return jsonify(EvaluationResponse.from_domain(created).to_dict()), 201


@evaluation_bp.route("/<int:evaluation_id>", methods=["DELETE"])
def delete_evaluation(evaluation_id: int):
    EvaluationService().delete(evaluation_id)
    return "", 204
