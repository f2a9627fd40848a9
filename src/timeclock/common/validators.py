from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.constants import HOURLY_RATE_MAX
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _require_text(value, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def _check_length(value: str, field_name: str, max_length: Optional[int]) -> str:
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")
    return value


def require_non_empty(value, field_name: str, max_length: Optional[int] = None) -> str:
    if value is None:
        raise ValidationError(f"{field_name} is required")
    value = _require_text(value, field_name).strip()
    if not value:
        raise ValidationError(f"{field_name} is required")
    return _check_length(value, field_name, max_length)


def require_email(value, field_name: str = "Email", max_length: Optional[int] = None) -> str:
    value = require_non_empty(value, field_name, max_length).lower()
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} is not a valid address")
    return value


def optional_text(value, field_name: str, max_length: Optional[int] = None) -> Optional[str]:
    """Strip ``value``; None when missing or blank."""
    if value is None:
        return None
    value = _require_text(value, field_name).strip()
    if not value:
        return None
    return _check_length(value, field_name, max_length)


def optional_tag(value, max_length: Optional[int] = None) -> Optional[str]:
    return optional_text(value, "RFID tag", max_length)


def optional_positive_rate(value, field_name: str = "Hourly rate") -> Optional[Decimal]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float, Decimal)):
        raise ValidationError(f"{field_name} must be a number")
    try:
        rate = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number") from None
    if not rate.is_finite() or rate <= 0:
        raise ValidationError(f"{field_name} must be positive")
    if rate > HOURLY_RATE_MAX:
        raise ValidationError(f"{field_name} must not exceed {HOURLY_RATE_MAX}")
    return rate


def require_date_range(start, end) -> None:
    if start > end:
        raise ValidationError("Start date must not be after end date")
