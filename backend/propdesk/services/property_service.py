# Overview: Service-layer operations for properties; encapsulates business logic and database work.

"""
Properties Service

Property is the one entity with write rules beyond visibility:
- only managers and owners create or update
- an owner may only name themselves as ownerId
- only the owning owner deletes (a manager gets 403 even on a property
  they manage)
"""

from __future__ import annotations

from ..extensions import db
from ..errors import Forbidden, NotFound
from ..models import Property, User
from ..validation import ModelValidationPolicy, ZIP_CODE_RE, validate_payload
from . import access_service
from .access_service import Caller


PROPERTY_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "name", "address", "city", "state", "zip_code", "type",
        "bedrooms", "bathrooms", "square_feet", "rent_amount", "status",
        "owner_id", "manager_id", "description",
    }),
    required_on_create=frozenset({
        "name", "address", "city", "state", "zip_code", "type", "rent_amount", "status", "owner_id",
    }),
    min_length={"state": 2},
    min_value={"bedrooms": 0, "bathrooms": 0, "square_feet": 0, "rent_amount": 0},
    patterns={"zip_code": (ZIP_CODE_RE, "must be a 5-digit ZIP or ZIP+4")},
)

PROPERTY_REFERENCES = (
    ("owner_id", User, "ownerId"),
    ("manager_id", User, "managerId"),
)


def _require_writer(caller: Caller) -> None:
    if not (caller.is_manager or caller.is_owner):
        raise Forbidden("Forbidden")


def list_properties(caller: Caller) -> list[Property]:
    """
    Properties visible to caller.

    Tenants see the properties their tenant profiles point at; no profile
    means an empty list.
    """
    return access_service.list_visible(Property, caller, order_by=Property.name.asc())


def get_property(property_id: str, caller: Caller) -> Property:
    return access_service.get_visible(Property, property_id, caller, "Property")


def create_property(payload: dict, caller: Caller) -> Property:
    patch = validate_payload(model=Property, payload=payload, policy=PROPERTY_POLICY, partial=False)

    _require_writer(caller)
    if caller.is_owner and patch["owner_id"] != caller.user_id:
        raise Forbidden("Cannot create property for another owner")

    access_service.check_references(patch, PROPERTY_REFERENCES)

    prop = Property(**patch)
    return access_service.save(prop)


def update_property(property_id: str, payload: dict, caller: Caller) -> Property:
    """
    Partial update. Ownership is checked before anything is merged.
    """
    _require_writer(caller)
    prop = get_property(property_id, caller)

    patch = validate_payload(model=Property, payload=payload, policy=PROPERTY_POLICY, partial=True)
    if caller.is_owner and patch.get("owner_id", caller.user_id) != caller.user_id:
        raise Forbidden("Cannot assign property to another owner")
    access_service.check_references(patch, PROPERTY_REFERENCES)

    access_service.apply_patch(prop, patch)
    return access_service.save(prop)


def delete_property(property_id: str, caller: Caller) -> None:
    """Hard delete; dependent rows follow the schema's ON DELETE rules."""
    prop = db.session.get(Property, property_id)
    if prop is None:
        raise NotFound("Property not found")
    if not caller.is_owner or prop.owner_id != caller.user_id:
        raise Forbidden("Access denied")

    access_service.delete(prop)
