# Overview: Flask API routes for tenant profile operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..decorators import require_auth, require_roles
from ..models import ROLE_MANAGER
from ..services import tenant_service
from ..services.access_service import current_caller


# Tenant profile management is manager-only, reads included
tenants_bp = Blueprint("tenants", __name__, url_prefix="/tenants")


@tenants_bp.get("")
@require_auth
@require_roles(ROLE_MANAGER)
def list_tenants_route():
    rows = tenant_service.list_tenants(current_caller(), property_id=request.args.get("propertyId"))
    return jsonify([t.to_dict() for t in rows]), 200


@tenants_bp.get("/property/<property_id>")
@require_auth
@require_roles(ROLE_MANAGER)
def list_property_tenants_route(property_id: str):
    rows = tenant_service.list_tenants(current_caller(), property_id=property_id)
    return jsonify([t.to_dict() for t in rows]), 200


@tenants_bp.get("/<tenant_id>")
@require_auth
@require_roles(ROLE_MANAGER)
def get_tenant_route(tenant_id: str):
    return jsonify(tenant_service.get_tenant(tenant_id, current_caller()).to_dict()), 200


@tenants_bp.post("")
@require_auth
@require_roles(ROLE_MANAGER)
def create_tenant_route():
    tenant = tenant_service.create_tenant(request.get_json(silent=True), current_caller())
    return jsonify(tenant.to_dict()), 201


@tenants_bp.put("/<tenant_id>")
@require_auth
@require_roles(ROLE_MANAGER)
def update_tenant_route(tenant_id: str):
    tenant = tenant_service.update_tenant(tenant_id, request.get_json(silent=True), current_caller())
    return jsonify(tenant.to_dict()), 200


@tenants_bp.delete("/<tenant_id>")
@require_auth
@require_roles(ROLE_MANAGER)
def delete_tenant_route(tenant_id: str):
    tenant_service.delete_tenant(tenant_id, current_caller())
    return "", 204
