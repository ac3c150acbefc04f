# Overview: Flask API routes for properties operations; parses input and returns JSON responses.

"""
Property routes.

Any signed-in role may read (rows are scoped per role). Managers and
owners write; only the owning owner deletes.
"""

from flask import Blueprint, request, jsonify

from ..decorators import require_auth, require_roles
from ..models import ROLE_MANAGER, ROLE_OWNER
from ..services import property_service
from ..services.access_service import current_caller


properties_bp = Blueprint("properties", __name__, url_prefix="/properties")


@properties_bp.get("")
@require_auth
def list_properties_route():
    rows = property_service.list_properties(current_caller())
    return jsonify([p.to_dict() for p in rows]), 200


@properties_bp.get("/<property_id>")
@require_auth
def get_property_route(property_id: str):
    prop = property_service.get_property(property_id, current_caller())
    return jsonify(prop.to_dict()), 200


@properties_bp.post("")
@require_auth
@require_roles(ROLE_MANAGER, ROLE_OWNER)
def create_property_route():
    prop = property_service.create_property(request.get_json(silent=True), current_caller())
    return jsonify(prop.to_dict()), 201


@properties_bp.put("/<property_id>")
@require_auth
@require_roles(ROLE_MANAGER, ROLE_OWNER)
def update_property_route(property_id: str):
    prop = property_service.update_property(property_id, request.get_json(silent=True), current_caller())
    return jsonify(prop.to_dict()), 200


@properties_bp.delete("/<property_id>")
@require_auth
@require_roles(ROLE_OWNER)
def delete_property_route(property_id: str):
    property_service.delete_property(property_id, current_caller())
    return "", 204
