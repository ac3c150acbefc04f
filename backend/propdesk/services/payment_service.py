# Overview: Service-layer operations for payments; encapsulates business logic and database work.

"""
Payments Service

Tenants may create and settle payments, but only against their own
tenant profile. Everything else is manager-only at the route layer.
"""

from __future__ import annotations

from ..errors import ValidationError
from ..extensions import db
from ..models import Lease, Payment, Property, Tenant
from ..validation import ModelValidationPolicy, validate_payload
from . import access_service
from .access_service import Caller
from propdesk.time_utils import utcnow


PAYMENT_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "lease_id", "tenant_id", "property_id", "amount", "due_date", "paid_date",
        "status", "type", "method", "transaction_id",
    }),
    required_on_create=frozenset({"lease_id", "tenant_id", "property_id", "amount", "due_date", "type"}),
    min_value={"amount": 0},
)

# Body of POST /payments/<id>/record
RECORD_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"paid_date", "method", "transaction_id"}),
)

PAYMENT_REFERENCES = (
    ("lease_id", Lease, "leaseId"),
    ("tenant_id", Tenant, "tenantId"),
    ("property_id", Property, "propertyId"),
)


def list_payments(
    caller: Caller,
    *,
    property_id: str | None = None,
    tenant_id: str | None = None,
) -> list[Payment]:
    return access_service.list_visible(
        Payment,
        caller,
        filters={"property_id": property_id, "tenant_id": tenant_id},
        order_by=Payment.due_date.desc(),
    )


def get_payment(payment_id: str, caller: Caller) -> Payment:
    return access_service.get_visible(Payment, payment_id, caller, "Payment")


def create_payment(payload: dict, caller: Caller) -> Payment:
    patch = validate_payload(model=Payment, payload=payload, policy=PAYMENT_POLICY, partial=False)
    access_service.require_own_tenant_profile(caller, patch["tenant_id"])
    access_service.check_references(patch, PAYMENT_REFERENCES)
    if caller.is_tenant:
        _require_matching_lease(patch)
    return access_service.save(Payment(**patch))


def _require_matching_lease(patch: dict) -> None:
    """A tenant's payment must sit on their own lease and that lease's property."""
    lease = db.session.get(Lease, patch["lease_id"])
    issues = []
    if lease.tenant_id != patch["tenant_id"]:
        issues.append({"field": "leaseId", "message": "does not belong to this tenant"})
    if lease.property_id != patch["property_id"]:
        issues.append({"field": "propertyId", "message": "does not match the lease"})
    if issues:
        raise ValidationError("Validation error", errors=issues)


def update_payment(payment_id: str, payload: dict, caller: Caller) -> Payment:
    payment = get_payment(payment_id, caller)
    patch = validate_payload(model=Payment, payload=payload, policy=PAYMENT_POLICY, partial=True)
    access_service.check_references(patch, PAYMENT_REFERENCES)
    access_service.apply_patch(payment, patch)
    return access_service.save(payment)


def record_payment(payment_id: str, payload: dict, caller: Caller) -> Payment:
    """
    Mark a payment as paid.

    paidDate defaults to now; method and transactionId are optional.
    """
    payment = get_payment(payment_id, caller)
    patch = validate_payload(model=Payment, payload=payload, policy=RECORD_POLICY, partial=True)

    if patch.get("paid_date") is None:
        patch["paid_date"] = utcnow()
    patch["status"] = "paid"

    access_service.apply_patch(payment, patch)
    return access_service.save(payment)


def delete_payment(payment_id: str, caller: Caller) -> None:
    access_service.delete(get_payment(payment_id, caller))
