from __future__ import annotations

from typing import Any, Optional

from ...core.enums import DataType, ValueColumn
from ...database.mysql_base import normalize_mysql_bool
from .base import ValueCodec

_FALSE_STRINGS = {"", "0", "false", "no", "off"}


class BooleanCodec(ValueCodec):
    """Stored as 0/1, read back as bool."""

    data_type = DataType.BOOLEAN
    column = ValueColumn.BOOLEAN

    def to_storage(self, value: Any) -> int:
        if isinstance(value, str):
            return 0 if value.strip().lower() in _FALSE_STRINGS else 1
        return 1 if value else 0

    def from_storage(self, raw: Any) -> Optional[bool]:
        return normalize_mysql_bool(raw)
