# Overview: Service-layer operations for leases; encapsulates business logic and database work.

from __future__ import annotations

from ..models import Lease, Property, Tenant
from ..validation import ModelValidationPolicy, validate_payload
from . import access_service
from .access_service import Caller


LEASE_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "property_id", "tenant_id", "start_date", "end_date", "monthly_rent",
        "deposit", "status", "terms", "signed_date",
    }),
    required_on_create=frozenset({
        "property_id", "tenant_id", "start_date", "end_date", "monthly_rent", "deposit", "signed_date",
    }),
    min_value={"monthly_rent": 0, "deposit": 0},
)

LEASE_REFERENCES = (
    ("property_id", Property, "propertyId"),
    ("tenant_id", Tenant, "tenantId"),
)


def list_leases(
    caller: Caller,
    *,
    property_id: str | None = None,
    tenant_id: str | None = None,
) -> list[Lease]:
    return access_service.list_visible(
        Lease,
        caller,
        filters={"property_id": property_id, "tenant_id": tenant_id},
        order_by=Lease.start_date.desc(),
    )


def get_lease(lease_id: str, caller: Caller) -> Lease:
    return access_service.get_visible(Lease, lease_id, caller, "Lease")


def create_lease(payload: dict, caller: Caller) -> Lease:
    patch = validate_payload(model=Lease, payload=payload, policy=LEASE_POLICY, partial=False)
    access_service.check_references(patch, LEASE_REFERENCES)
    return access_service.save(Lease(**patch))


def update_lease(lease_id: str, payload: dict, caller: Caller) -> Lease:
    lease = get_lease(lease_id, caller)
    patch = validate_payload(model=Lease, payload=payload, policy=LEASE_POLICY, partial=True)
    access_service.check_references(patch, LEASE_REFERENCES)
    access_service.apply_patch(lease, patch)
    return access_service.save(lease)


def delete_lease(lease_id: str, caller: Caller) -> None:
    access_service.delete(get_lease(lease_id, caller))
