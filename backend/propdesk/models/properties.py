from __future__ import annotations

from ..extensions import db
from propdesk.money import format_money
from propdesk.time_utils import to_utc_z
from .base import new_id


PROPERTY_TYPES = ("apartment", "house", "commercial", "condo")
PROPERTY_STATUSES = ("available", "occupied", "maintenance")
TENANT_STATUSES = ("active", "inactive", "pending")
LEASE_STATUSES = ("active", "expired", "terminated")


class Property(db.Model):
    """
    A rentable unit or building.

    Ownership is exclusive: exactly one owner (owner_id) and at most one
    manager (manager_id). `status` is caller-maintained; nothing flips it
    to "occupied" when a lease starts.
    """
    __tablename__ = "properties"
    __table_args__ = (
        db.Index("ix_properties_owner", "owner_id"),
        db.Index("ix_properties_manager", "manager_id"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(255), nullable=False)
    address = db.Column(db.Text, nullable=False)
    city = db.Column(db.String(100), nullable=False)
    state = db.Column(db.String(50), nullable=False)
    zip_code = db.Column(db.String(10), nullable=False)
    type = db.Column(db.Enum(*PROPERTY_TYPES, name="property_type", native_enum=False), nullable=False)
    bedrooms = db.Column(db.Integer, nullable=True)
    bathrooms = db.Column(db.Integer, nullable=True)
    square_feet = db.Column(db.Integer, nullable=True)
    rent_amount = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(
        db.Enum(*PROPERTY_STATUSES, name="property_status", native_enum=False),
        nullable=False,
        default="available",
    )
    owner_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)
    manager_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    description = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    owner = db.relationship("User", foreign_keys=[owner_id])
    manager = db.relationship("User", foreign_keys=[manager_id])

    def __repr__(self) -> str:
        return f"<Property id={self.id} name={self.name!r} owner_id={self.owner_id}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zipCode": self.zip_code,
            "type": self.type,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "squareFeet": self.square_feet,
            "rentAmount": format_money(self.rent_amount),
            "status": self.status,
            "ownerId": self.owner_id,
            "managerId": self.manager_id,
            "description": self.description,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }


class Tenant(db.Model):
    """
    Tenant profile: links a tenant-role user to a property (and lease).

    Tenant-role visibility everywhere else is keyed on these profile ids,
    not on the user id.
    """
    __tablename__ = "tenants"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    property_id = db.Column(
        db.String(36), db.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # tenants <-> leases reference each other; this side is added after both tables exist
    lease_id = db.Column(
        db.String(36),
        db.ForeignKey("leases.id", ondelete="SET NULL", use_alter=True, name="fk_tenants_lease_id"),
        nullable=True,
    )
    emergency_contact_name = db.Column(db.String(255), nullable=True)
    emergency_contact_phone = db.Column(db.String(50), nullable=True)
    emergency_contact_relationship = db.Column(db.String(100), nullable=True)
    move_in_date = db.Column(db.DateTime(timezone=True), nullable=False)
    move_out_date = db.Column(db.DateTime(timezone=True), nullable=True)
    status = db.Column(
        db.Enum(*TENANT_STATUSES, name="tenant_status", native_enum=False),
        nullable=False,
        default="active",
    )

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    user = db.relationship("User")
    property = db.relationship("Property")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "propertyId": self.property_id,
            "leaseId": self.lease_id,
            "emergencyContactName": self.emergency_contact_name,
            "emergencyContactPhone": self.emergency_contact_phone,
            "emergencyContactRelationship": self.emergency_contact_relationship,
            "moveInDate": to_utc_z(self.move_in_date),
            "moveOutDate": to_utc_z(self.move_out_date),
            "status": self.status,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }


class Lease(db.Model):
    __tablename__ = "leases"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    property_id = db.Column(
        db.String(36), db.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tenant_id = db.Column(db.String(36), db.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = db.Column(db.DateTime(timezone=True), nullable=False)
    end_date = db.Column(db.DateTime(timezone=True), nullable=False)
    monthly_rent = db.Column(db.Numeric(10, 2), nullable=False)
    deposit = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(
        db.Enum(*LEASE_STATUSES, name="lease_status", native_enum=False),
        nullable=False,
        default="active",
    )
    terms = db.Column(db.Text, nullable=True)
    signed_date = db.Column(db.DateTime(timezone=True), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    property = db.relationship("Property")
    tenant = db.relationship("Tenant", foreign_keys=[tenant_id])

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "propertyId": self.property_id,
            "tenantId": self.tenant_id,
            "startDate": to_utc_z(self.start_date),
            "endDate": to_utc_z(self.end_date),
            "monthlyRent": format_money(self.monthly_rent),
            "deposit": format_money(self.deposit),
            "status": self.status,
            "terms": self.terms,
            "signedDate": to_utc_z(self.signed_date),
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
