from __future__ import annotations

import re
from typing import Any, Optional

from ..core.constants import MAX_AMOUNT, MAX_NAME_LENGTH
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: str, field_name: str, *, max_len: int = MAX_NAME_LENGTH) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    value = value.strip()
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters", field=field_name)
    return value


def optional_email(value: Optional[str], field_name: str = "email") -> Optional[str]:
    value = (value or "").strip()
    if not value:
        return None
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} is not a valid e-mail address", field=field_name)
    return value


def require_amount(value: Any, field_name: str, *, minimum: float = 0, maximum: float = MAX_AMOUNT) -> float:
    """Coerce a numeric field (wage, fee) and check its range."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    try:
        num = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    if num != num or num < minimum or num > maximum:
        raise ValidationError(f"{field_name} must be between {minimum:g} and {maximum:g}", field=field_name)
    return num


def optional_amount(value: Any, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    return require_amount(value, field_name)


def require_positive_id(value: Any, field_name: str) -> int:
    try:
        num = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not valid", field=field_name)
    if num <= 0:
        raise ValidationError(f"{field_name} is not valid", field=field_name)
    return num
