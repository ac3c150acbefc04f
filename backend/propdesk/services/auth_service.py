# Overview: Service-layer operations for auth; encapsulates business logic and database work.

"""
Registration and credential checks.

SECURITY NOTES:
- Passwords hashed with bcrypt (salted; cost from BCRYPT_ROUNDS)
- Unknown email and wrong password fail identically (InvalidCredentials),
  and both paths run exactly one bcrypt comparison
- Session tokens managed separately (see session_service.py)
- Nothing in here logs a password or a request body
"""

from __future__ import annotations

from functools import lru_cache

import bcrypt
from flask import current_app
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..errors import InvalidCredentials, UserAlreadyExists, ValidationError
from ..models import User, ROLES, ROLE_MANAGER, ROLE_OWNER
from ..validation import require_fields
from propdesk.time_utils import utcnow


# Short role names used by some clients
ROLE_ALIASES = {
    "manager": ROLE_MANAGER,
    "owner": ROLE_OWNER,
}

REGISTER_RULES = {
    "email": "email",
    "password": "password",
    "name": "name",
    "phone": "optional_text",
}

LOGIN_RULES = {
    "email": "email",
    "password": "password",
}


def _rounds() -> int:
    return int(current_app.config.get("BCRYPT_ROUNDS", 12))


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash password using bcrypt; the salt is embedded in the result."""
    salt = bcrypt.gensalt(rounds=rounds or _rounds())
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")  # Store as string in database


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    bcrypt.checkpw() compares in constant time. Malformed hashes verify as False.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


@lru_cache(maxsize=8)
def _dummy_hash(rounds: int) -> str:
    return hash_password("propdesk-timing-equalizer", rounds=rounds)


def normalize_role(value) -> str:
    if isinstance(value, str):
        role = ROLE_ALIASES.get(value.strip(), value.strip())
        if role in ROLES:
            return role
    raise ValidationError(
        "Validation error",
        errors=[{"field": "role", "message": f"must be one of: {', '.join(ROLES)}"}],
    )


def register_user(payload: dict) -> User:
    """
    Create an account.

    Raises:
        ValidationError: malformed email/password/name/role
        UserAlreadyExists: email already registered
    """
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    issues: list[dict] = []
    try:
        data = require_fields(payload, REGISTER_RULES)
    except ValidationError as exc:
        data = {}
        issues.extend(exc.errors)
    try:
        role = normalize_role(payload.get("role"))
    except ValidationError as exc:
        role = None
        issues.extend(exc.errors)
    if issues:
        raise ValidationError("Validation error", errors=issues)

    existing = db.session.query(User).filter_by(email=data["email"]).first()
    if existing:
        raise UserAlreadyExists()

    user = User(
        email=data["email"],
        password_hash=hash_password(data["password"]),
        name=data["name"],
        role=role,
        phone=data.get("phone"),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Concurrent registration with the same email won the race
        db.session.rollback()
        raise UserAlreadyExists()
    return user


def authenticate(payload: dict) -> User:
    """
    Check email + password.

    Returns the User on success; raises InvalidCredentials otherwise. The
    message is the same whether the email is unknown or the password wrong.
    """
    data = require_fields(payload, LOGIN_RULES)

    user = db.session.query(User).filter_by(email=data["email"]).first()

    if user is None:
        # Burn the same bcrypt work as a real comparison
        verify_password(data["password"], _dummy_hash(_rounds()))
        current_app.logger.info("Failed login for %s", data["email"])
        raise InvalidCredentials()

    if not verify_password(data["password"], user.password_hash):
        current_app.logger.info("Failed login for %s", data["email"])
        raise InvalidCredentials()

    return user


def update_profile(user: User, payload: dict) -> User:
    """Name/phone/avatar changes for the signed-in user."""
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    allowed = {"name", "phone", "avatar"}
    unknown = [k for k in payload if k not in allowed]
    if unknown:
        raise ValidationError(
            "Validation error",
            errors=[{"field": k, "message": "is not an allowed field"} for k in unknown],
        )

    rules = {k: ("name" if k == "name" else "optional_text") for k in payload}
    data = require_fields(payload, rules)
    for key in payload:
        setattr(user, key, data.get(key))
    user.updated_at = utcnow()
    db.session.commit()
    return user
