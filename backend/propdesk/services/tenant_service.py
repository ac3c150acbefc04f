# Overview: Service-layer operations for tenant profiles; encapsulates business logic and database work.

"""
Tenant profiles link a tenant-role user to a property and, once signed, a
lease. Routes restrict writes to managers; reads are additionally scoped
by access_service for completeness.
"""

from __future__ import annotations

from ..models import Lease, Property, Tenant, User
from ..validation import ModelValidationPolicy, validate_payload
from . import access_service
from .access_service import Caller


TENANT_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "user_id", "property_id", "lease_id",
        "emergency_contact_name", "emergency_contact_phone", "emergency_contact_relationship",
        "move_in_date", "move_out_date", "status",
    }),
    required_on_create=frozenset({"user_id", "property_id", "move_in_date"}),
)

TENANT_REFERENCES = (
    ("user_id", User, "userId"),
    ("property_id", Property, "propertyId"),
    ("lease_id", Lease, "leaseId"),
)


def list_tenants(caller: Caller, *, property_id: str | None = None) -> list[Tenant]:
    return access_service.list_visible(
        Tenant,
        caller,
        filters={"property_id": property_id},
        order_by=Tenant.created_at.asc(),
    )


def get_tenant(tenant_id: str, caller: Caller) -> Tenant:
    return access_service.get_visible(Tenant, tenant_id, caller, "Tenant")


def create_tenant(payload: dict, caller: Caller) -> Tenant:
    patch = validate_payload(model=Tenant, payload=payload, policy=TENANT_POLICY, partial=False)
    access_service.check_references(patch, TENANT_REFERENCES)
    return access_service.save(Tenant(**patch))


def update_tenant(tenant_id: str, payload: dict, caller: Caller) -> Tenant:
    tenant = get_tenant(tenant_id, caller)
    patch = validate_payload(model=Tenant, payload=payload, policy=TENANT_POLICY, partial=True)
    access_service.check_references(patch, TENANT_REFERENCES)
    access_service.apply_patch(tenant, patch)
    return access_service.save(tenant)


def delete_tenant(tenant_id: str, caller: Caller) -> None:
    access_service.delete(get_tenant(tenant_id, caller))
