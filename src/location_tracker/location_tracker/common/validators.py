from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import MissingFields, ValidationError


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if is_blank(value):
        raise MissingFields(f"{field_name} is required")
    return str(value).strip()


def require_fields(**fields: Any) -> None:
    """Raise one ``MissingFields`` naming every blank field."""
    missing = [name for name, value in fields.items() if is_blank(value)]
    if missing:
        raise MissingFields(f"Missing required fields: {', '.join(missing)}")


def require_number(value: Any, field_name: str) -> float:
    if is_blank(value):
        raise MissingFields(f"{field_name} is required")
    return _to_float(value, field_name)


def optional_number(value: Any, field_name: str, default: float) -> float:
    if is_blank(value):
        return float(default)
    return _to_float(value, field_name)


def _to_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number")
    return number


def parse_limit(value: Any, default: int) -> int:
    if is_blank(value):
        return default
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ValidationError("limit must be an integer")
    if limit <= 0:
        raise ValidationError("limit must be positive")
    return limit
