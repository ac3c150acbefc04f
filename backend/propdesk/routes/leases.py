# Overview: Flask API routes for leases operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..decorators import require_auth, require_roles
from ..models import ROLE_MANAGER
from ..services import lease_service
from ..services.access_service import current_caller


leases_bp = Blueprint("leases", __name__, url_prefix="/leases")


def _listing(**filters):
    rows = lease_service.list_leases(current_caller(), **filters)
    return jsonify([lease.to_dict() for lease in rows]), 200


@leases_bp.get("")
@require_auth
def list_leases_route():
    """Query params: propertyId, tenantId (both optional, combined with AND)."""
    return _listing(
        property_id=request.args.get("propertyId"),
        tenant_id=request.args.get("tenantId"),
    )


@leases_bp.get("/property/<property_id>")
@require_auth
def list_property_leases_route(property_id: str):
    return _listing(property_id=property_id)


@leases_bp.get("/tenant/<tenant_id>")
@require_auth
def list_tenant_leases_route(tenant_id: str):
    return _listing(tenant_id=tenant_id)


@leases_bp.get("/<lease_id>")
@require_auth
def get_lease_route(lease_id: str):
    return jsonify(lease_service.get_lease(lease_id, current_caller()).to_dict()), 200


@leases_bp.post("")
@require_auth
@require_roles(ROLE_MANAGER)
def create_lease_route():
    lease = lease_service.create_lease(request.get_json(silent=True), current_caller())
    return jsonify(lease.to_dict()), 201


@leases_bp.put("/<lease_id>")
@require_auth
@require_roles(ROLE_MANAGER)
def update_lease_route(lease_id: str):
    lease = lease_service.update_lease(lease_id, request.get_json(silent=True), current_caller())
    return jsonify(lease.to_dict()), 200


@leases_bp.delete("/<lease_id>")
@require_auth
@require_roles(ROLE_MANAGER)
def delete_lease_route(lease_id: str):
    lease_service.delete_lease(lease_id, current_caller())
    return "", 204
