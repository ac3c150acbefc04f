# Overview: Role-scoped visibility rules shared by every entity service.

"""
Who can see which rows.

Every list/get/update/delete goes through `scoped_query`, so a row is
either visible to the caller under these rules or it does not exist for
them (403 on direct access, absent from lists).

    Entity                       manager          owner                   tenant
    ---------------------------  ---------------  ----------------------  ---------------------------
    Property                     managerId == me  ownerId == me           linked by my tenant profiles
    Tenant profile               all              on my properties        my own profiles
    Lease/Payment/Maintenance    all              on my properties        tenantId in my profile ids
    Document                     all              on my properties        tenantId in my profile ids

Tenant-role scoping always uses tenant-profile ids (tenants.id), never
the user id. Unknown roles see nothing.

The permission check and the write that follows are separate statements
and are not serialized; a concurrent reassignment between them is not
detected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from flask import g
from sqlalchemy import false, select

from ..extensions import db
from ..errors import Forbidden, NotFound, ValidationError
from ..models import (
    Document,
    Lease,
    MaintenanceRequest,
    Payment,
    Property,
    Tenant,
    ROLE_MANAGER,
    ROLE_OWNER,
    ROLE_TENANT,
)
from propdesk.time_utils import utcnow


# Entities whose rows hang off a property and a tenant profile
PROPERTY_DERIVED = (Lease, Payment, MaintenanceRequest, Document)


@dataclass(frozen=True)
class Caller:
    """Identity the access rules are evaluated against."""
    user_id: str
    role: str

    @property
    def is_manager(self) -> bool:
        return self.role == ROLE_MANAGER

    @property
    def is_owner(self) -> bool:
        return self.role == ROLE_OWNER

    @property
    def is_tenant(self) -> bool:
        return self.role == ROLE_TENANT


def current_caller() -> Caller:
    """Caller established by @require_auth."""
    return Caller(user_id=g.user_id, role=g.role)


def _owned_property_ids(user_id: str):
    return select(Property.id).where(Property.owner_id == user_id)


def _tenant_profile_ids(user_id: str):
    return select(Tenant.id).where(Tenant.user_id == user_id)


def tenant_profile_ids(user_id: str) -> list[str]:
    """Tenant-profile ids belonging to a user (usually zero or one)."""
    return list(db.session.execute(_tenant_profile_ids(user_id)).scalars())


def owned_property_ids(user_id: str) -> list[str]:
    return list(db.session.execute(_owned_property_ids(user_id)).scalars())


def visibility_filter(model, caller: Caller):
    """
    SQL criterion restricting `model` to what `caller` may see.

    Returns None when the caller is unrestricted for this entity.
    """
    uid = caller.user_id

    if model is Property:
        if caller.is_manager:
            return Property.manager_id == uid
        if caller.is_owner:
            return Property.owner_id == uid
        if caller.is_tenant:
            linked = select(Tenant.property_id).where(Tenant.user_id == uid)
            return Property.id.in_(linked)
        return false()

    if model is Tenant:
        if caller.is_manager:
            return None
        if caller.is_owner:
            return Tenant.property_id.in_(_owned_property_ids(uid))
        if caller.is_tenant:
            return Tenant.user_id == uid
        return false()

    if model in PROPERTY_DERIVED:
        if caller.is_manager:
            return None
        if caller.is_owner:
            return model.property_id.in_(_owned_property_ids(uid))
        if caller.is_tenant:
            return model.tenant_id.in_(_tenant_profile_ids(uid))
        return false()

    raise ValueError(f"No visibility rule for {model.__name__}")


def scoped_query(model, caller: Caller):
    """Query over `model` with the caller's visibility rule applied."""
    query = db.session.query(model)
    criterion = visibility_filter(model, caller)
    if criterion is not None:
        query = query.filter(criterion)
    return query


def list_visible(model, caller: Caller, *, filters: dict[str, Any] | None = None, order_by=None) -> list:
    """
    All rows of `model` visible to caller, optionally narrowed by equality
    filters (column attribute name -> value). None-valued filters are ignored.
    """
    query = scoped_query(model, caller)
    for name, value in (filters or {}).items():
        if value is None:
            continue
        query = query.filter(getattr(model, name) == value)
    if order_by is not None:
        query = query.order_by(order_by)
    return query.all()


def get_visible(model, record_id: str, caller: Caller, label: str):
    """
    Fetch by primary key.

    Raises NotFound when the row does not exist and Forbidden when it
    exists but the caller's rule excludes it.
    """
    record = db.session.get(model, record_id)
    if record is None:
        raise NotFound(f"{label} not found")

    criterion = visibility_filter(model, caller)
    if criterion is not None:
        visible = db.session.query(model.id).filter(model.id == record_id, criterion).first()
        if visible is None:
            raise Forbidden("Access denied")
    return record


def require_reference(model, record_id: str | None, field_name: str, issues: list[dict]) -> None:
    """Collect a field issue when a referenced row does not exist."""
    if record_id is None:
        return
    if db.session.get(model, record_id) is None:
        issues.append({"field": field_name, "message": "does not exist"})


def check_references(patch: dict, refs: Iterable[tuple[str, Any, str]]) -> None:
    """
    Validate foreign keys present in a patch.

    refs: (attribute name, model, wire field name) triples.
    """
    issues: list[dict] = []
    for attr, model, field_name in refs:
        if attr in patch:
            require_reference(model, patch[attr], field_name, issues)
    if issues:
        raise ValidationError("Validation error", errors=issues)


def require_own_tenant_profile(caller: Caller, tenant_id: str | None) -> None:
    """Tenant-role writers may only act on their own tenant profile."""
    if not caller.is_tenant:
        return
    if tenant_id not in tenant_profile_ids(caller.user_id):
        raise Forbidden("Cannot act on behalf of another tenant")


def apply_patch(record, patch: dict) -> None:
    """Merge validated fields over a row and refresh updated_at."""
    for key, value in patch.items():
        setattr(record, key, value)
    if hasattr(record, "updated_at"):
        record.updated_at = utcnow()


def save(record):
    db.session.add(record)
    db.session.commit()
    return record


def delete(record) -> None:
    db.session.delete(record)
    db.session.commit()
