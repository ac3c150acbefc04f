# Overview: Error taxonomy and the Flask handlers that turn it into JSON.

"""
Services raise these; routes stay free of try/except boilerplate for the
common cases. Every response body has the same envelope:

    {"message": "...", "errors": [{"field": "...", "message": "..."}]}

`errors` only appears on validation failures.
"""

from __future__ import annotations

import traceback

from flask import Flask, current_app, g, jsonify, request
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    """Base class for errors with a fixed HTTP status."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(ApiError):
    """400: malformed or out-of-range input, with per-field issues."""

    status_code = 400
    default_message = "Validation error"

    def __init__(self, message: str | None = None, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = list(errors or [])

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class UserAlreadyExists(ApiError):
    status_code = 400
    default_message = "User already exists"


class InvalidCredentials(ApiError):
    status_code = 401
    default_message = "Invalid credentials"


class Unauthenticated(ApiError):
    status_code = 401
    default_message = "Authentication required"


class Forbidden(ApiError):
    status_code = 403
    default_message = "Access denied"


class NotFound(ApiError):
    status_code = 404
    default_message = "Not found"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ApiError)
    def handle_api_error(exc: ApiError):
        if isinstance(exc, Forbidden):
            current_app.logger.warning(
                "Access denied: user=%s role=%s %s %s",
                getattr(g, "user_id", None),
                getattr(g, "role", None),
                request.method,
                request.path,
            )
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        if exc.code == 404:
            message = "Route not found"
        else:
            message = exc.description or exc.name
        return jsonify({"message": message}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        current_app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        body = {"message": "Internal server error"}
        if current_app.config.get("EXPOSE_ERROR_DETAILS"):
            body["detail"] = str(exc)
            body["stack"] = traceback.format_exc()
        return jsonify(body), 500
