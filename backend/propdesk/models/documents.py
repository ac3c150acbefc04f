from __future__ import annotations

from ..extensions import db
from propdesk.time_utils import to_utc_z
from .base import new_id


DOCUMENT_TYPES = ("lease", "invoice", "receipt", "maintenance", "notice", "other")


class Document(db.Model):
    """
    Document metadata. The file itself lives in external storage under `url`.
    """
    __tablename__ = "documents"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(255), nullable=False)
    type = db.Column(db.Enum(*DOCUMENT_TYPES, name="document_type", native_enum=False), nullable=False)
    url = db.Column(db.Text, nullable=False)
    property_id = db.Column(
        db.String(36), db.ForeignKey("properties.id", ondelete="SET NULL"), nullable=True, index=True
    )
    tenant_id = db.Column(db.String(36), db.ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True)
    lease_id = db.Column(db.String(36), db.ForeignKey("leases.id", ondelete="SET NULL"), nullable=True)
    uploaded_date = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    uploaded_by = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)

    uploader = db.relationship("User")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "url": self.url,
            "propertyId": self.property_id,
            "tenantId": self.tenant_id,
            "leaseId": self.lease_id,
            "uploadedDate": to_utc_z(self.uploaded_date),
            "uploadedBy": self.uploaded_by,
        }
