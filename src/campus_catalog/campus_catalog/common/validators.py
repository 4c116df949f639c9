from __future__ import annotations

import re

from ..core.constants import MAX_ATTRIBUTE_NAME_LENGTH
from ..core.exceptions import ValidationError

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_attribute_name(value: str) -> str:
    name = require_non_empty(value, "Attribute name")
    if len(name) > MAX_ATTRIBUTE_NAME_LENGTH:
        raise ValidationError(f"Attribute name longer than {MAX_ATTRIBUTE_NAME_LENGTH} characters")
    return name


def require_sql_identifier(value: str, field_name: str) -> str:
    """Table/column names are interpolated into SQL, so keep them plain."""
    if not isinstance(value, str) or not _IDENTIFIER_RE.match(value):
        raise ValueError(f"{field_name} is not a valid SQL identifier: {value!r}")
    return value


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if number < 1:
        raise ValidationError(f"{field_name} must be positive")
    return number


def require_non_negative_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number
