from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, Enum, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeMeta

from propdesk.errors import ValidationError
from propdesk.money import MAX_AMOUNT, AmountOutOfRange, MoneyFormatError, to_decimal
from propdesk.time_utils import parse_iso_datetime


EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
ZIP_CODE_RE = re.compile(r"^\d{5}(-\d{4})?$")

# signed 32-bit INTEGER columns
INT_MAX = 2**31 - 1
INT_MIN = -(2**31)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake(key: str) -> str:
    """zipCode -> zip_code"""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def to_camel(key: str) -> str:
    """zip_code -> zipCode"""
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: what clients are allowed to set (security boundary), snake_case
    - required_on_create: fields required for POST
    - min_length / min_value / patterns: rules SQLAlchemy metadata can't express
    """
    writable_fields: frozenset[str]
    required_on_create: frozenset[str] = frozenset()
    min_length: dict[str, int] = field(default_factory=dict)
    min_value: dict[str, int] = field(default_factory=dict)
    patterns: dict[str, tuple[re.Pattern, str]] = field(default_factory=dict)


class _Issues:
    """Collects field-level problems so the client sees all of them at once."""

    def __init__(self):
        self.items: list[dict] = []

    def add(self, field_name: str, message: str) -> None:
        self.items.append({"field": to_camel(field_name), "message": message})

    def raise_if_any(self) -> None:
        if self.items:
            raise ValidationError("Validation error", errors=self.items)


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _coerce_value(col, value: Any):
    """Returns the coerced value or raises ValueError with a client-facing message."""
    coltype = col.type

    # Enums before String: sqlalchemy.Enum subclasses String
    if isinstance(coltype, Enum):
        if value not in coltype.enums:
            raise ValueError(f"must be one of: {', '.join(coltype.enums)}")
        return value

    # Integers - strict validation to reject floats and scientific notation
    if isinstance(coltype, Integer):
        number = None
        if isinstance(value, int) and not isinstance(value, bool):
            number = value
        elif isinstance(value, float) and value.is_integer():
            number = int(value)
        elif isinstance(value, str):
            stripped = value.strip()
            if stripped.lstrip("-").isdigit():
                number = int(stripped)
        if number is None:
            raise ValueError("must be an integer")
        if number > INT_MAX:
            raise ValueError(f"must be <= {INT_MAX}")
        if number < INT_MIN:
            raise ValueError(f"must be >= {INT_MIN}")
        return number

    # Money columns: numbers or numeric strings, normalized to 2 places
    if isinstance(coltype, Numeric):
        try:
            return to_decimal(value)
        except AmountOutOfRange:
            raise ValueError(f"cannot exceed {MAX_AMOUNT}")
        except MoneyFormatError:
            raise ValueError("must be a number")

    if isinstance(coltype, Boolean):
        if isinstance(value, bool):
            return value
        raise ValueError("must be a boolean")

    # Datetimes (accept ISO-8601 strings; normalize to UTC)
    if isinstance(coltype, DateTime):
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                dt = parse_iso_datetime(value)
            except ValueError:
                dt = None
            if dt is not None:
                return dt
        raise ValueError("must be an ISO-8601 date or datetime")

    # Strings / Text
    if isinstance(coltype, (String, Text)):
        if not isinstance(value, str):
            raise ValueError("must be a string")
        return value.strip()

    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: Any,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON (camelCase keys) against:
    - SQLAlchemy column metadata (nullable, type, enum choices, String length)
    - a policy allowlist (writable_fields); unknown keys are rejected
    - required_on_create (if partial=False)
    Returns a cleaned patch dict keyed by column attribute name.

    partial=False: create semantics (enforce required_on_create)
    partial=True: patch semantics (validate only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    issues = _Issues()
    cols = _columns_by_key(model)
    supplied = {to_snake(k): (k, v) for k, v in payload.items()}

    if not partial:
        for name in sorted(policy.required_on_create):
            raw = supplied.get(name, (None, None))[1]
            if raw is None:
                issues.add(name, "is required")

    patch: dict = {}

    for name, (raw_key, raw) in supplied.items():
        if name not in policy.writable_fields or name not in cols:
            issues.items.append({"field": raw_key, "message": "is not an allowed field"})
            continue

        col = cols[name]

        # NULL handling
        if raw is None:
            if not col.nullable and partial:
                issues.add(name, "cannot be null")
            elif col.nullable:
                patch[name] = None
            continue

        try:
            val = _coerce_value(col, raw)
        except ValueError as exc:
            issues.add(name, str(exc))
            continue

        if isinstance(val, str):
            if not col.nullable and val == "":
                issues.add(name, "cannot be blank")
                continue
            length = getattr(col.type, "length", None)
            if length and len(val) > length:
                issues.add(name, f"exceeds max length {length}")
                continue
            min_len = policy.min_length.get(name)
            if min_len and len(val) < min_len:
                issues.add(name, f"must be at least {min_len} characters")
                continue
            rule = policy.patterns.get(name)
            if rule and not rule[0].match(val):
                issues.add(name, rule[1])
                continue

        floor = policy.min_value.get(name)
        if floor is not None and val is not None and val < floor:
            issues.add(name, f"must be >= {floor}")
            continue

        patch[name] = val

    issues.raise_if_any()
    return patch


def require_fields(payload: Any, rules: dict[str, str]) -> dict:
    """
    Minimal shape check for non-model payloads (login, register, actions).

    rules maps field name -> "email" | "password" | "name" | "text" | "optional_text".
    """
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    issues = _Issues()
    cleaned: dict = {}
    for name, kind in rules.items():
        value = payload.get(name)
        optional = kind.startswith("optional_")
        if value is None or (isinstance(value, str) and not value.strip()):
            if not optional:
                issues.add(name, "is required")
            continue
        if not isinstance(value, str):
            issues.add(name, "must be a string")
            continue
        if kind == "email":
            value = value.strip().lower()
            if not EMAIL_RE.match(value):
                issues.add(name, "must be a valid email address")
                continue
        elif kind == "password":
            if len(value) < 6:
                issues.add(name, "must be at least 6 characters")
                continue
        elif kind == "name":
            value = value.strip()
            if len(value) < 2:
                issues.add(name, "must be at least 2 characters")
                continue
        else:
            value = value.strip()
        cleaned[name] = value

    issues.raise_if_any()
    return cleaned
