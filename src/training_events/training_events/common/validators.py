from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError

_TRUE = {"1", "true", "yes", "on"}


def parse_int(value: Any, field_name: str, default: int = 0) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def parse_flag(value: Any) -> bool:
    """Form checkbox/hidden flag: 1/0, true/false, on/off."""

    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return bool(value)
    return str(value).strip().lower() in _TRUE
