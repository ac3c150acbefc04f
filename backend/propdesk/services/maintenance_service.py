# Overview: Service-layer operations for maintenance requests; encapsulates business logic and database work.

"""
Maintenance Requests Service

Lifecycle: pending -> in_progress (assign) -> completed (complete).
`cancelled` is reachable through a plain update. Nothing here enforces
the order; a manager can set any status directly.
"""

from __future__ import annotations

from ..models import MaintenanceRequest, Property, Tenant, User
from ..validation import ModelValidationPolicy, validate_payload
from . import access_service
from .access_service import Caller
from propdesk.time_utils import utcnow


CREATE_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"property_id", "tenant_id", "title", "description", "category", "priority"}),
    required_on_create=frozenset({"property_id", "tenant_id", "title", "description", "category"}),
    min_length={"description": 10},
)

UPDATE_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "title", "description", "category", "priority", "status", "assigned_to",
        "estimated_cost", "actual_cost", "completed_date", "notes",
    }),
    min_length={"description": 10},
    min_value={"estimated_cost": 0, "actual_cost": 0},
)

ASSIGN_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"assigned_to"}),
    required_on_create=frozenset({"assigned_to"}),
)

COMPLETE_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"completed_date", "actual_cost", "notes"}),
    min_value={"actual_cost": 0},
)

MAINTENANCE_REFERENCES = (
    ("property_id", Property, "propertyId"),
    ("tenant_id", Tenant, "tenantId"),
    ("assigned_to", User, "assignedTo"),
)


def list_requests(
    caller: Caller,
    *,
    property_id: str | None = None,
    tenant_id: str | None = None,
) -> list[MaintenanceRequest]:
    return access_service.list_visible(
        MaintenanceRequest,
        caller,
        filters={"property_id": property_id, "tenant_id": tenant_id},
        order_by=MaintenanceRequest.requested_date.desc(),
    )


def get_request(request_id: str, caller: Caller) -> MaintenanceRequest:
    return access_service.get_visible(MaintenanceRequest, request_id, caller, "Maintenance request")


def create_request(payload: dict, caller: Caller) -> MaintenanceRequest:
    patch = validate_payload(model=MaintenanceRequest, payload=payload, policy=CREATE_POLICY, partial=False)
    access_service.require_own_tenant_profile(caller, patch["tenant_id"])
    access_service.check_references(patch, MAINTENANCE_REFERENCES)

    patch["status"] = "pending"
    patch["requested_date"] = utcnow()
    return access_service.save(MaintenanceRequest(**patch))


def update_request(request_id: str, payload: dict, caller: Caller) -> MaintenanceRequest:
    req = get_request(request_id, caller)
    patch = validate_payload(model=MaintenanceRequest, payload=payload, policy=UPDATE_POLICY, partial=True)
    access_service.check_references(patch, MAINTENANCE_REFERENCES)
    access_service.apply_patch(req, patch)
    return access_service.save(req)


def assign_request(request_id: str, payload: dict, caller: Caller) -> MaintenanceRequest:
    """Set the assignee and move the request to in_progress."""
    req = get_request(request_id, caller)
    patch = validate_payload(model=MaintenanceRequest, payload=payload, policy=ASSIGN_POLICY, partial=False)
    access_service.check_references(patch, MAINTENANCE_REFERENCES)

    patch["status"] = "in_progress"
    access_service.apply_patch(req, patch)
    return access_service.save(req)


def complete_request(request_id: str, payload: dict, caller: Caller) -> MaintenanceRequest:
    """
    Close a request. completedDate defaults to now; actualCost (if given)
    is what reports count as maintenance spend.
    """
    req = get_request(request_id, caller)
    patch = validate_payload(model=MaintenanceRequest, payload=payload, policy=COMPLETE_POLICY, partial=True)

    if patch.get("completed_date") is None:
        patch["completed_date"] = utcnow()
    patch["status"] = "completed"

    access_service.apply_patch(req, patch)
    return access_service.save(req)


def delete_request(request_id: str, caller: Caller) -> None:
    access_service.delete(get_request(request_id, caller))
