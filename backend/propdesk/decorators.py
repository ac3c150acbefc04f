# Overview: Request and role decorators for API routes.

from functools import wraps
from flask import request, g

from .errors import Forbidden, Unauthenticated
from .services import session_service


def bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    return token or None


def require_auth(f):
    """
    Require a valid bearer token and establish caller identity.

    Sets the following Flask g attributes:
    - g.current_user: The authenticated User object
    - g.user_id: its id
    - g.role: its role
    - g.session_context: The full SessionContext object

    Raises Unauthenticated (401) for a missing, unknown, expired or revoked token.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = bearer_token()
        if not token:
            raise Unauthenticated("Authentication required")

        context = session_service.validate_session(token)
        if not context:
            raise Unauthenticated("Invalid or expired token")

        g.current_user = context.user
        g.user_id = context.user_id
        g.role = context.role
        g.session_context = context

        return f(*args, **kwargs)

    return decorated_function


def require_roles(*roles: str):
    """
    Allow only the listed roles. Must be stacked under @require_auth.

    Fails closed: a request without a resolved role is rejected too.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            role = getattr(g, "role", None)
            if role is None:
                raise Unauthenticated("Authentication required")
            if role not in roles:
                raise Forbidden("Forbidden")
            return f(*args, **kwargs)

        return decorated_function
    return decorator
