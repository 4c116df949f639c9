from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Union

from ...core.enums import DataType, ValueColumn
from ...core.exceptions import ValidationError
from ...database.mysql_base import normalize_mysql_number
from .base import ValueCodec


class NumberCodec(ValueCodec):
    data_type = DataType.NUMBER
    column = ValueColumn.NUMBER

    def to_storage(self, value: Any) -> Union[int, float]:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, (float, Decimal)):
            number = float(value)
        elif isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                raise ValidationError(f"Not a number: {value!r}") from None
        else:
            raise ValidationError(f"Not a number: {value!r}")

        if math.isnan(number) or math.isinf(number):
            raise ValidationError(f"Number must be finite: {value!r}")
        return number

    def from_storage(self, raw: Any) -> Union[int, float, None]:
        return normalize_mysql_number(raw)
