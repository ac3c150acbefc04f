# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

"""
Authentication API routes

- POST /auth/register: create an account, returns {user, token} (201)
- POST /auth/login:    returns {user, token}
- POST /auth/logout:   revokes the presented token
- GET  /auth/me:       the signed-in user
- PUT  /auth/me:       update name/phone/avatar
"""

from flask import Blueprint, request, jsonify, current_app, g

from ..services import auth_service
from ..services import session_service
from ..decorators import require_auth, bearer_token


auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


def _issue_token(user) -> str:
    _session, token = session_service.create_session(
        user_id=user.id,
        user_agent=request.headers.get("User-Agent"),
        ip_address=request.remote_addr,
    )
    return token


@auth_bp.post("/register")
def register_route():
    user = auth_service.register_user(request.get_json(silent=True))
    current_app.logger.info("Registered user %s (%s)", user.id, user.role)
    return jsonify({"user": user.to_dict(), "token": _issue_token(user)}), 201


@auth_bp.post("/login")
def login_route():
    """
    Authenticate user and create session token.

    Token must be included in Authorization header for protected routes.
    Unknown email and wrong password both answer 401 "Invalid credentials".
    """
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}

    user = auth_service.authenticate(payload)
    return jsonify({"user": user.to_dict(), "token": _issue_token(user)}), 200


@auth_bp.post("/logout")
@require_auth
def logout_route():
    session_service.revoke_session(bearer_token())
    return jsonify({"message": "Logged out"}), 200


@auth_bp.get("/me")
@require_auth
def me_route():
    return jsonify(g.current_user.to_dict()), 200


@auth_bp.put("/me")
@require_auth
def update_me_route():
    user = auth_service.update_profile(g.current_user, request.get_json(silent=True))
    return jsonify(user.to_dict()), 200
