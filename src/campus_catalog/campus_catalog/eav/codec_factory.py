from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Union

from ..core.enums import DataType, ValueColumn
from ..core.exceptions import InvalidDataTypeError
from .codecs.base import TypedValue, ValueCodec
from .codecs.boolean_codec import BooleanCodec
from .codecs.date_codec import DateCodec
from .codecs.number_codec import NumberCodec
from .codecs.string_codec import StringCodec, TextCodec


def coerce_data_type(data_type: Union[DataType, str, None]) -> DataType:
    """Map a caller-supplied type name to DataType; ``None`` means string."""
    if data_type is None:
        return DataType.STRING
    if isinstance(data_type, DataType):
        return data_type
    try:
        return DataType(str(data_type).strip().lower())
    except ValueError:
        raise InvalidDataTypeError(data_type) from None


@dataclass
class ValueCodecFactory:
    """Factory Pattern: one codec per data type, also reachable by column."""

    _by_type: Dict[DataType, ValueCodec] = field(
        default_factory=lambda: {
            codec.data_type: codec
            for codec in (StringCodec(), NumberCodec(), TextCodec(), BooleanCodec(), DateCodec())
        }
    )

    def for_type(self, data_type: Union[DataType, str, None]) -> ValueCodec:
        return self._by_type[coerce_data_type(data_type)]

    def for_column(self, column: Union[ValueColumn, str]) -> ValueCodec:
        column = ValueColumn(column)
        for codec in self._by_type.values():
            if codec.column == column:
                return codec
        raise KeyError(column)

    def encode(self, data_type: Union[DataType, str, None], value: Any) -> TypedValue:
        return self.for_type(data_type).encode(value)
