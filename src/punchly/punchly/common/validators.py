from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required", field_name)
    return value.strip()


def require_present(value: Any, field_name: str) -> Any:
    if value is None:
        raise ValidationError(f"{field_name} is required", field_name)
    return value


def require_non_negative(value: Optional[Decimal], field_name: str) -> None:
    if value is not None and value < 0:
        raise ValidationError(f"{field_name} must be a positive number", field_name)


def require_date_order(start: date, end: date, message: str = "End date cannot be before start date.") -> None:
    if end < start:
        raise ValidationError(message, "end_date")


def require_known_fields(patch: Mapping[str, Any], allowed: Iterable[str]) -> None:
    unknown = sorted(set(patch) - set(allowed))
    if unknown:
        raise ValidationError(f"Unknown field(s): {', '.join(unknown)}")


def require_timezone(name: Optional[str]) -> ZoneInfo:
    """Resolve an IANA timezone name."""
    if not name or not name.strip():
        raise ValidationError("timezone must be provided", "timezone")
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise ValidationError(f"Unknown timezone: {name}", "timezone")
