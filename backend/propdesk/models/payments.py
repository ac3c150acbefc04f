from __future__ import annotations

from ..extensions import db
from propdesk.money import format_money
from propdesk.time_utils import to_utc_z
from .base import new_id


PAYMENT_STATUSES = ("pending", "paid", "overdue", "partial")
PAYMENT_TYPES = ("rent", "deposit", "fee", "maintenance")
PAYMENT_METHODS = ("bank_transfer", "credit_card", "check", "cash")


class Payment(db.Model):
    """
    A charge against a lease and whether it has been settled.

    lease/tenant/property are expected to agree with the lease's own
    property_id and tenant_id; only the foreign keys are enforced.
    """
    __tablename__ = "payments"
    __table_args__ = (
        db.Index("ix_payments_property_due", "property_id", "due_date"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    lease_id = db.Column(db.String(36), db.ForeignKey("leases.id", ondelete="CASCADE"), nullable=False, index=True)
    tenant_id = db.Column(db.String(36), db.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    property_id = db.Column(db.String(36), db.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    due_date = db.Column(db.DateTime(timezone=True), nullable=False)
    paid_date = db.Column(db.DateTime(timezone=True), nullable=True)
    status = db.Column(
        db.Enum(*PAYMENT_STATUSES, name="payment_status", native_enum=False),
        nullable=False,
        default="pending",
    )
    type = db.Column(db.Enum(*PAYMENT_TYPES, name="payment_type", native_enum=False), nullable=False)
    method = db.Column(db.Enum(*PAYMENT_METHODS, name="payment_method", native_enum=False), nullable=True)
    transaction_id = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    lease = db.relationship("Lease")
    tenant = db.relationship("Tenant")
    property = db.relationship("Property")

    def __repr__(self) -> str:
        return f"<Payment id={self.id} amount={self.amount} status={self.status}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "leaseId": self.lease_id,
            "tenantId": self.tenant_id,
            "propertyId": self.property_id,
            "amount": format_money(self.amount),
            "dueDate": to_utc_z(self.due_date),
            "paidDate": to_utc_z(self.paid_date),
            "status": self.status,
            "type": self.type,
            "method": self.method,
            "transactionId": self.transaction_id,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
