from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, session
from werkzeug.exceptions import HTTPException

from ..core.enums import MANAGER_ROLES, Role
from ..core.exceptions import AuthorizationError, DataAccessError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def ok(data=None, status=200, **meta):
    payload = {"success": True, "data": data}
    if meta:
        payload["meta"] = meta
    return jsonify(payload), status


def fail(message="Bad Request", status=400, code=None):
    err = {"message": message}
    if code:
        err["code"] = code
    return jsonify({"success": False, "error": err}), status


def current_user_id() -> str:
    return str(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role"))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please sign in to continue", status=401, code="UNAUTHENTICATED")
        return view(*args, **kwargs)

    return wrapper


def manager_required(view):
    """Allow only admin and project_manager sessions."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please sign in to continue", status=401, code="UNAUTHENTICATED")
        if session.get("role") not in {r.value for r in MANAGER_ROLES}:
            return fail("You do not have permission for this action", status=403, code="FORBIDDEN")
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return fail(str(e), status=400, code="VALIDATION_ERROR")

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return fail(str(e), status=404, code="NOT_FOUND")

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return fail(str(e), status=403, code="FORBIDDEN")

    @app.errorhandler(DataAccessError)
    def _data_access(e: DataAccessError):
        logger.exception("data access failed")
        return fail("Failed to load data. Please try again.", status=500, code="DATA_ACCESS_ERROR")

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return fail(e.description or e.name, status=e.code or 500)

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        logger.exception("unhandled error")
        return fail("Internal server error", status=500)
