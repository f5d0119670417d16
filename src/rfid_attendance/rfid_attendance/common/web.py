from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import Flask, current_app, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    StorageError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

ADMIN_ROLE_VALUES = {Role.SUPER_ADMIN.value, Role.ADMIN.value}


def ok(status: int = 200, **payload: Any):
    return jsonify({"success": True, **payload}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_role() -> Optional[Role]:
    value = session.get("role")
    return Role(value) if value else None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please log in to continue", 401)
        return current_app.ensure_sync(view)(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please log in to continue", 401)
        if session.get("role") not in ADMIN_ROLE_VALUES:
            return fail("Admin access required", 403)
        return current_app.ensure_sync(view)(*args, **kwargs)

    return wrapper


def super_admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please log in to continue", 401)
        if session.get("role") != Role.SUPER_ADMIN.value:
            return fail("Super admin access required", 403)
        return current_app.ensure_sync(view)(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def date_arg(name: str, default: date) -> date:
    value = (request.args.get(name) or "").strip()
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def register_error_handlers(app: Flask) -> None:
    """Translate domain exceptions raised by services into JSON errors."""

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return fail(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return fail(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e: AuthorizationError):
        return fail(str(e), 403)

    @app.errorhandler(StorageError)
    def _storage(e: StorageError):
        logger.warning("[storage] request failed: %s", e)
        return fail("Storage unavailable, please retry", 503)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return fail(str(e), 400)
