from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime, time
from decimal import Decimal
from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def to_json_value(value: Any) -> Any:
    """Make service results JSON friendly (Decimal -> float, dates -> ISO, times -> HH:MM)."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if is_dataclass(value) and not isinstance(value, type):
        return to_json_value(asdict(value))
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    if hasattr(value, "value") and isinstance(getattr(value, "value"), str):
        return value.value
    return value


def ok(data: Any = None, *, status: int = 200, message: str | None = None):
    body: dict[str, Any] = {"success": True, "data": to_json_value(data)}
    if message:
        body["message"] = message
    return jsonify(body), status


def error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def status_for(exc: DomainError) -> int:
    for exc_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, exc_type):
            return status
    return 400


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def handle_errors(view):
    """Translate domain errors raised by services into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error(str(e), status_for(e))
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return error("Internal server error", 500)

    return wrapper


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error("Authentication required", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error("Authentication required", 401)
        if session.get("role") != Role.ADMIN.value:
            return error("Unauthorized: Admin access required", 403)
        return view(*args, **kwargs)

    return wrapper


def current_role() -> Role:
    return Role(session.get("role"))


def current_user_id() -> int:
    return int(session["user_id"])
