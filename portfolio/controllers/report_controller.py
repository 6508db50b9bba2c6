"""
Report controller - read-only sales ledger and portfolio statistics.
"""

from flask import Blueprint, jsonify

from portfolio.core.auth_decorators import token_required
from portfolio.schemas import SaleResponse, statistics_to_dict
from portfolio.services.report_service import ReportService

report_bp = Blueprint("reports", __name__, url_prefix="/api")


@report_bp.route("/sales", methods=["GET"])
@token_required
def list_sales():
    """Sales joined with their domain (requires authentication)."""
    sales = ReportService().list_sales()
    return jsonify([SaleResponse.from_domain(s).to_dict() for s in sales])


@report_bp.route("/stats", methods=["GET"])
def portfolio_stats():
    """Total cost, proceeds, profit, ROI and status counts."""
    return jsonify(statistics_to_dict(ReportService().get_statistics()))
