from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError

def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_number(value: Any, field_name: str, *, minimum: Optional[float] = None) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field_name} must be >= {minimum:g}")
    return number
