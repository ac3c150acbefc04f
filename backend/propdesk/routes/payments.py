# Overview: Flask API routes for payments operations; parses input and returns JSON responses.

"""
Payment routes.

Tenants may create a payment and record it as paid, but only against
their own tenant profile (enforced in payment_service).
"""

from flask import Blueprint, request, jsonify

from ..decorators import require_auth, require_roles
from ..models import ROLE_MANAGER, ROLE_TENANT
from ..services import payment_service
from ..services.access_service import current_caller


payments_bp = Blueprint("payments", __name__, url_prefix="/payments")


def _listing(**filters):
    rows = payment_service.list_payments(current_caller(), **filters)
    return jsonify([p.to_dict() for p in rows]), 200


@payments_bp.get("")
@require_auth
def list_payments_route():
    return _listing(
        property_id=request.args.get("propertyId"),
        tenant_id=request.args.get("tenantId"),
    )


@payments_bp.get("/property/<property_id>")
@require_auth
def list_property_payments_route(property_id: str):
    return _listing(property_id=property_id)


@payments_bp.get("/tenant/<tenant_id>")
@require_auth
def list_tenant_payments_route(tenant_id: str):
    return _listing(tenant_id=tenant_id)


@payments_bp.get("/<payment_id>")
@require_auth
def get_payment_route(payment_id: str):
    return jsonify(payment_service.get_payment(payment_id, current_caller()).to_dict()), 200


@payments_bp.post("")
@require_auth
@require_roles(ROLE_MANAGER, ROLE_TENANT)
def create_payment_route():
    payment = payment_service.create_payment(request.get_json(silent=True), current_caller())
    return jsonify(payment.to_dict()), 201


@payments_bp.put("/<payment_id>")
@require_auth
@require_roles(ROLE_MANAGER)
def update_payment_route(payment_id: str):
    payment = payment_service.update_payment(payment_id, request.get_json(silent=True), current_caller())
    return jsonify(payment.to_dict()), 200


@payments_bp.post("/<payment_id>/record")
@require_auth
@require_roles(ROLE_MANAGER, ROLE_TENANT)
def record_payment_route(payment_id: str):
    """Body (all optional): paidDate, method, transactionId."""
    payment = payment_service.record_payment(payment_id, request.get_json(silent=True), current_caller())
    return jsonify(payment.to_dict()), 200


@payments_bp.delete("/<payment_id>")
@require_auth
@require_roles(ROLE_MANAGER)
def delete_payment_route(payment_id: str):
    payment_service.delete_payment(payment_id, current_caller())
    return "", 204
