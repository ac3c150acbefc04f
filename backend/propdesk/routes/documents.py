# Overview: Flask API routes for documents operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify

from ..decorators import require_auth, require_roles
from ..models import ROLE_MANAGER
from ..services import document_service
from ..services.access_service import current_caller


documents_bp = Blueprint("documents", __name__, url_prefix="/documents")


def _listing(**filters):
    rows = document_service.list_documents(current_caller(), **filters)
    return jsonify([d.to_dict() for d in rows]), 200


def _upload_payload():
    """JSON body, or multipart form fields with an optional `file` part."""
    payload = request.get_json(silent=True)
    if payload is not None:
        return payload

    payload = request.form.to_dict()
    upload = request.files.get("file")
    if upload is not None and not payload.get("name"):
        payload["name"] = upload.filename
    return payload


@documents_bp.get("")
@require_auth
def list_documents_route():
    return _listing(
        property_id=request.args.get("propertyId"),
        tenant_id=request.args.get("tenantId"),
        lease_id=request.args.get("leaseId"),
    )


@documents_bp.get("/property/<property_id>")
@require_auth
def list_property_documents_route(property_id: str):
    return _listing(property_id=property_id)


@documents_bp.get("/tenant/<tenant_id>")
@require_auth
def list_tenant_documents_route(tenant_id: str):
    return _listing(tenant_id=tenant_id)


@documents_bp.get("/<document_id>")
@require_auth
def get_document_route(document_id: str):
    return jsonify(document_service.get_document(document_id, current_caller()).to_dict()), 200


@documents_bp.post("/upload")
@require_auth
@require_roles(ROLE_MANAGER)
def upload_document_route():
    doc = document_service.upload_document(_upload_payload(), current_caller())
    return jsonify(doc.to_dict()), 201


@documents_bp.delete("/<document_id>")
@require_auth
@require_roles(ROLE_MANAGER)
def delete_document_route(document_id: str):
    document_service.delete_document(document_id, current_caller())
    return "", 204
