# Overview: Service-layer operations for documents; encapsulates business logic and database work.

"""
Documents are metadata only: the upload route records name/type/links and
derives a storage URL. Moving bytes is someone else's job.
"""

from __future__ import annotations

import time

from flask import current_app

from ..models import Document, Lease, Property, Tenant
from ..validation import ModelValidationPolicy, validate_payload
from . import access_service
from .access_service import Caller


UPLOAD_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"name", "type", "property_id", "tenant_id", "lease_id"}),
    required_on_create=frozenset({"name", "type"}),
)

DOCUMENT_REFERENCES = (
    ("property_id", Property, "propertyId"),
    ("tenant_id", Tenant, "tenantId"),
    ("lease_id", Lease, "leaseId"),
)


def storage_url(name: str) -> str:
    prefix = current_app.config.get("UPLOAD_URL_PREFIX", "/uploads").rstrip("/")
    return f"{prefix}/{int(time.time() * 1000)}-{name}"


def list_documents(
    caller: Caller,
    *,
    property_id: str | None = None,
    tenant_id: str | None = None,
    lease_id: str | None = None,
) -> list[Document]:
    return access_service.list_visible(
        Document,
        caller,
        filters={"property_id": property_id, "tenant_id": tenant_id, "lease_id": lease_id},
        order_by=Document.uploaded_date.desc(),
    )


def get_document(document_id: str, caller: Caller) -> Document:
    return access_service.get_visible(Document, document_id, caller, "Document")


def upload_document(payload: dict, caller: Caller) -> Document:
    # Multipart clients send "" for unset links
    if isinstance(payload, dict):
        payload = {k: (None if v == "" else v) for k, v in payload.items()}

    patch = validate_payload(model=Document, payload=payload, policy=UPLOAD_POLICY, partial=False)
    access_service.check_references(patch, DOCUMENT_REFERENCES)

    doc = Document(
        url=storage_url(patch["name"]),
        uploaded_by=caller.user_id,
        **patch,
    )
    return access_service.save(doc)


def delete_document(document_id: str, caller: Caller) -> None:
    access_service.delete(get_document(document_id, caller))
