from __future__ import annotations

import json
from datetime import date
from typing import Any

from ...core.enums import DataType, ValueColumn
from .base import ValueCodec


class StringCodec(ValueCodec):
    """Short strings. Dicts and lists are kept as JSON text."""

    data_type = DataType.STRING
    column = ValueColumn.STRING

    def to_storage(self, value: Any) -> str:
        if isinstance(value, (dict, list, tuple)):
            return json.dumps(value, default=str, ensure_ascii=False)
        if isinstance(value, date):
            return value.isoformat()
        return str(value)

    def from_storage(self, raw: Any) -> Any:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        if not isinstance(raw, str) or not raw or raw[0] not in "[{":
            return raw
        try:
            parsed = json.loads(raw)
        except ValueError:
            return raw
        # Empty objects stay as their literal text.
        if isinstance(parsed, list) or (isinstance(parsed, dict) and parsed):
            return parsed
        return raw


class TextCodec(StringCodec):
    """Long free text; same conversions as strings, wider column."""

    data_type = DataType.TEXT
    column = ValueColumn.TEXT
