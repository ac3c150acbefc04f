# Overview: Flask API routes for maintenance request operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..decorators import require_auth, require_roles
from ..models import ROLE_MANAGER, ROLE_TENANT
from ..services import maintenance_service
from ..services.access_service import current_caller


maintenance_bp = Blueprint("maintenance", __name__, url_prefix="/maintenance")


def _listing(**filters):
    rows = maintenance_service.list_requests(current_caller(), **filters)
    return jsonify([r.to_dict() for r in rows]), 200


@maintenance_bp.get("")
@require_auth
def list_requests_route():
    return _listing(
        property_id=request.args.get("propertyId"),
        tenant_id=request.args.get("tenantId"),
    )


@maintenance_bp.get("/property/<property_id>")
@require_auth
def list_property_requests_route(property_id: str):
    return _listing(property_id=property_id)


@maintenance_bp.get("/tenant/<tenant_id>")
@require_auth
def list_tenant_requests_route(tenant_id: str):
    return _listing(tenant_id=tenant_id)


@maintenance_bp.get("/<request_id>")
@require_auth
def get_request_route(request_id: str):
    return jsonify(maintenance_service.get_request(request_id, current_caller()).to_dict()), 200


@maintenance_bp.post("")
@require_auth
@require_roles(ROLE_TENANT, ROLE_MANAGER)
def create_request_route():
    req = maintenance_service.create_request(request.get_json(silent=True), current_caller())
    return jsonify(req.to_dict()), 201


@maintenance_bp.put("/<request_id>")
@require_auth
@require_roles(ROLE_MANAGER)
def update_request_route(request_id: str):
    req = maintenance_service.update_request(request_id, request.get_json(silent=True), current_caller())
    return jsonify(req.to_dict()), 200


@maintenance_bp.post("/<request_id>/assign")
@require_auth
@require_roles(ROLE_MANAGER)
def assign_request_route(request_id: str):
    req = maintenance_service.assign_request(request_id, request.get_json(silent=True), current_caller())
    return jsonify(req.to_dict()), 200


@maintenance_bp.post("/<request_id>/complete")
@require_auth
@require_roles(ROLE_MANAGER)
def complete_request_route(request_id: str):
    req = maintenance_service.complete_request(request_id, request.get_json(silent=True), current_caller())
    return jsonify(req.to_dict()), 200


@maintenance_bp.delete("/<request_id>")
@require_auth
@require_roles(ROLE_MANAGER)
def delete_request_route(request_id: str):
    maintenance_service.delete_request(request_id, current_caller())
    return "", 204
