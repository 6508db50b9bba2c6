"""
Domain controller - CRUD and batch endpoints for tracked domains.
"""

import logging

from flask import Blueprint, jsonify, request

from portfolio.schemas import (
    BulkDeleteRequest,
    BulkUpdateRequest,
    DomainResponse,
    DomainWriteRequest,
    batch_result_to_dict,
)
from portfolio.services.domain_service import DomainService

logger = logging.getLogger(__name__)

domain_bp = Blueprint("domains", __name__, url_prefix="/api/domains")


@domain_bp.route("", methods=["GET"])
def list_domains():
    """Return every domain, newest first."""
    domains = DomainService().list_domains()
    return jsonify([DomainResponse.from_domain(d).to_dict() for d in domains])


@domain_bp.route("", methods=["POST"])
def create_domain():
    """Create a domain.

    Expected JSON: name, registrar, category, purchaseDate, expirationDate,
    status and optionally purchasePrice. When status is sold, saleDate and
    sellingPrice (and optionally buyer) record the sale.

    Status codes:
        201: created, body is the stored domain
        400: missing or malformed fields
        409: DUPLICATE_DOMAIN
    """
    payload = DomainWriteRequest.from_json(request.get_json(silent=True))
    created = DomainService().create(payload.domain, payload.sale)
    return jsonify(DomainResponse.from_domain(created).to_dict()), 201


@domain_bp.route("/<int:domain_id>", methods=["PUT"])
def update_domain(domain_id: int):
    """Replace a domain and recompute its sale."""
    payload = DomainWriteRequest.from_json(request.get_json(silent=True))
    updated = DomainService().update(domain_id, payload.domain, payload.sale)
    return jsonify(DomainResponse.from_domain(updated).to_dict())


@domain_bp.route("/<int:domain_id>", methods=["DELETE"])
def delete_domain(domain_id: int):
    DomainService().delete(domain_id)
    return "", 204


@domain_bp.route("/bulk-delete", methods=["POST"])
def bulk_delete_domains():
    """Delete several domains; each id succeeds or fails on its own.

    Expected JSON: {"ids": [int, ...]}
    Returns: {"results": [...], "succeeded": [ids], "failed": [{id, error}]}
    """
    payload = BulkDeleteRequest.from_json(request.get_json(silent=True))
    result = DomainService().bulk_delete(payload.ids)
    return jsonify(batch_result_to_dict(result))


@domain_bp.route("/bulk-update", methods=["POST"])
def bulk_update_domains():
    """Apply one partial change to several domains.

    Expected JSON: {"ids": [int, ...], "changes": {"status"?, "registrar"?,
    "category"?, "saleDate"?, "sellingPrice"?, "buyer"?}}
    """
    payload = BulkUpdateRequest.from_json(request.get_json(silent=True))
    result = DomainService().bulk_update(payload.ids, payload.changes, payload.sale)
    return jsonify(batch_result_to_dict(result))
