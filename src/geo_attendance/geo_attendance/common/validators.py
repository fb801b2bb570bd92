from __future__ import annotations

import math

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    # Ids are opaque: validated, never rewritten.
    return str(value)


def require_positive(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return number


def require_in_range(value, field_name: str, low: float, high: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number) or number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low:g} and {high:g}")
    return number
