from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ...core.enums import DataType, ValueColumn


@dataclass(frozen=True)
class TypedValue:
    """A value tagged with its data type and the one column it occupies."""

    data_type: DataType
    column: ValueColumn
    stored: Any


class ValueCodec(ABC):
    """Strategy Pattern: how one data type is written to and read from its column."""

    data_type: DataType
    column: ValueColumn

    def encode(self, value: Any) -> TypedValue:
        return TypedValue(data_type=self.data_type, column=self.column, stored=self.to_storage(value))

    @abstractmethod
    def to_storage(self, value: Any) -> Any:
        raise NotImplementedError

    @abstractmethod
    def from_storage(self, raw: Any) -> Any:
        raise NotImplementedError
