from __future__ import annotations

from datetime import date, datetime
from typing import Any

from ...common.datetime_utils import parse_iso_date
from ...core.enums import DataType, ValueColumn
from ...core.exceptions import ValidationError
from .base import ValueCodec


class DateCodec(ValueCodec):
    data_type = DataType.DATE
    column = ValueColumn.DATE

    def to_storage(self, value: Any) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return parse_iso_date(value)
            except ValueError:
                raise ValidationError(f"Not an ISO date: {value!r}") from None
        raise ValidationError(f"Not a date: {value!r}")

    def from_storage(self, raw: Any) -> Any:
        if isinstance(raw, datetime):
            return raw.date()
        if isinstance(raw, str):
            return parse_iso_date(raw)
        return raw
