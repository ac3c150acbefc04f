# Overview: Flask API routes for financial reports; parses input and returns JSON responses.

"""
Reporting routes.

Query params:
- period: month | quarter | year (optional; anything else means all time
  and is echoed back as given)
"""

from flask import Blueprint, request, jsonify

from ..decorators import require_auth, require_roles
from ..models import ROLE_MANAGER, ROLE_OWNER
from ..services import reporting_service
from ..services.access_service import current_caller


reports_bp = Blueprint("reports", __name__, url_prefix="/reports")


@reports_bp.get("/property/<property_id>")
@require_auth
@require_roles(ROLE_MANAGER, ROLE_OWNER)
def property_report_route(property_id: str):
    report = reporting_service.property_report(property_id, current_caller(), request.args.get("period"))
    return jsonify(report), 200


@reports_bp.get("/owner/<owner_id>")
@require_auth
@require_roles(ROLE_OWNER)
def owner_report_route(owner_id: str):
    report = reporting_service.owner_report(owner_id, current_caller(), request.args.get("period"))
    return jsonify(report), 200
