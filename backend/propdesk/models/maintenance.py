from __future__ import annotations

from ..extensions import db
from propdesk.money import format_money
from propdesk.time_utils import to_utc_z
from .base import new_id


MAINTENANCE_CATEGORIES = ("plumbing", "electrical", "hvac", "appliance", "structural", "other")
MAINTENANCE_PRIORITIES = ("low", "medium", "high", "emergency")
MAINTENANCE_STATUSES = ("pending", "in_progress", "completed", "cancelled")


class MaintenanceRequest(db.Model):
    __tablename__ = "maintenance_requests"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    property_id = db.Column(
        db.String(36), db.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tenant_id = db.Column(db.String(36), db.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(
        db.Enum(*MAINTENANCE_CATEGORIES, name="maintenance_category", native_enum=False), nullable=False
    )
    priority = db.Column(
        db.Enum(*MAINTENANCE_PRIORITIES, name="maintenance_priority", native_enum=False),
        nullable=False,
        default="medium",
    )
    status = db.Column(
        db.Enum(*MAINTENANCE_STATUSES, name="maintenance_status", native_enum=False),
        nullable=False,
        default="pending",
    )
    requested_date = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    completed_date = db.Column(db.DateTime(timezone=True), nullable=True)
    assigned_to = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    estimated_cost = db.Column(db.Numeric(10, 2), nullable=True)
    # Only actual_cost feeds the maintenance line of reports
    actual_cost = db.Column(db.Numeric(10, 2), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    property = db.relationship("Property")
    tenant = db.relationship("Tenant")
    assignee = db.relationship("User", foreign_keys=[assigned_to])

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "propertyId": self.property_id,
            "tenantId": self.tenant_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "priority": self.priority,
            "status": self.status,
            "requestedDate": to_utc_z(self.requested_date),
            "completedDate": to_utc_z(self.completed_date),
            "assignedTo": self.assigned_to,
            "estimatedCost": format_money(self.estimated_cost),
            "actualCost": format_money(self.actual_cost),
            "notes": self.notes,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
