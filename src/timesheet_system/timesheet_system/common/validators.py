from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_fields(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Reject payloads where any of ``fields`` is missing, None or ''."""
    missing = [f for f in fields if data.get(f) is None or data.get(f) == ""]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def to_decimal(value: Any, field_name: str) -> Decimal:
    """Coerce a JSON/form value into a Decimal.

    Floats go through ``str`` so 0.7 stays 0.7 instead of its binary expansion.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return result


def require_between(value: Decimal, field_name: str, low: Decimal, high: Decimal) -> Decimal:
    if value < low or value > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return value
