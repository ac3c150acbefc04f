# Overview: Service-layer operations for financial reports; encapsulates business logic and database work.

"""
Income/expense summaries for a property or an owner's portfolio.

`build_report` is pure: it takes already-fetched payment and maintenance
rows (anything exposing amount/status/type/due_date and actual_cost) and
returns the wire dict. `property_report` and `owner_report` resolve the
scope, enforce access, fetch, and delegate.

Figures are estimates: the expense buckets other than maintenance are
fixed fractions of income, and `totalExpenses` uses a flat 20% that the
breakdown is not guaranteed to reproduce.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from ..extensions import db
from ..errors import Forbidden
from ..models import MaintenanceRequest, Payment, Property
from . import access_service
from .access_service import Caller
from propdesk.money import to_float
from propdesk.time_utils import as_naive_utc, period_start, to_utc_z, utcnow


EXPENSE_RATES = {
    "utilities": 0.05,
    "taxes": 0.10,
    "insurance": 0.03,
    "other": 0.02,
}

# Applied to totalIncome on top of maintenance
OPERATING_EXPENSE_RATE = 0.2

SCOPE_PROPERTY = "propertyId"
SCOPE_OWNER = "ownerId"


def _report_id(scope_key: str, scope_id: str, period_label: str) -> str:
    if scope_key == SCOPE_OWNER:
        return f"report_owner_{scope_id}_{period_label}"
    return f"report_{scope_id}_{period_label}"


def filter_by_period(payments: Iterable, period: str | None, now: datetime | None = None) -> list:
    """Payments due on or after the start of the trailing window."""
    start = period_start(period, now)
    if start is None:
        return list(payments)
    return [p for p in payments if p.due_date is not None and as_naive_utc(p.due_date) >= start]


def build_report(
    *,
    scope_key: str,
    scope_id: str,
    payments: Iterable,
    maintenance_requests: Iterable,
    period: str | None = None,
    now: datetime | None = None,
) -> dict:
    if now is None:
        now = utcnow()

    in_window = filter_by_period(payments, period, now)
    paid = [p for p in in_window if p.status == "paid"]

    total_income = sum(to_float(p.amount) for p in paid)
    rent_collected = sum(to_float(p.amount) for p in paid if p.type == "rent")

    # Maintenance is lifetime, never windowed
    total_maintenance = sum(
        to_float(m.actual_cost) for m in maintenance_requests if m.actual_cost is not None
    )

    total_expenses = total_maintenance + total_income * OPERATING_EXPENSE_RATE
    period_label = period or "all"

    expenses = {"maintenance": total_maintenance}
    for bucket, rate in EXPENSE_RATES.items():
        expenses[bucket] = total_income * rate

    return {
        "id": _report_id(scope_key, scope_id, period_label),
        scope_key: scope_id,
        "period": period_label,
        "totalIncome": total_income,
        "totalExpenses": total_expenses,
        "netIncome": total_income - total_expenses,
        "rentCollected": rent_collected,
        "expenses": expenses,
        "generatedDate": to_utc_z(now),
    }


def property_report(property_id: str, caller: Caller, period: str | None = None) -> dict:
    access_service.get_visible(Property, property_id, caller, "Property")

    payments = db.session.query(Payment).filter(Payment.property_id == property_id).all()
    maintenance = (
        db.session.query(MaintenanceRequest)
        .filter(MaintenanceRequest.property_id == property_id)
        .all()
    )
    return build_report(
        scope_key=SCOPE_PROPERTY,
        scope_id=property_id,
        payments=payments,
        maintenance_requests=maintenance,
        period=period,
    )


def owner_report(owner_id: str, caller: Caller, period: str | None = None) -> dict:
    """
    Portfolio report across every property the owner holds.

    An owner with no properties gets an all-zero report.
    """
    if caller.user_id != owner_id:
        raise Forbidden("Access denied")

    property_ids = access_service.owned_property_ids(owner_id)
    if property_ids:
        payments = db.session.query(Payment).filter(Payment.property_id.in_(property_ids)).all()
        maintenance = (
            db.session.query(MaintenanceRequest)
            .filter(MaintenanceRequest.property_id.in_(property_ids))
            .all()
        )
    else:
        payments, maintenance = [], []

    return build_report(
        scope_key=SCOPE_OWNER,
        scope_id=owner_id,
        payments=payments,
        maintenance_requests=maintenance,
        period=period,
    )
