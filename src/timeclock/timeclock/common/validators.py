from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_iso_date(value: Optional[str], field_name: str) -> Optional[str]:
    """Validate an optional YYYY-MM-DD string and return it normalized (or None)."""
    if value is None or not str(value).strip():
        return None
    try:
        return parse_iso_date(str(value).strip()).strftime("%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date") from None


def positive_int(value, field_name: str, *, default: int) -> int:
    if value is None or str(value).strip() == "":
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be an integer") from None
    if number < 1:
        raise ValidationError(f"{field_name} must be at least 1")
    return number
