from __future__ import annotations

from enum import Enum


class DataType(str, Enum):
    """Declared type of an EAV attribute; picks the value column."""

    STRING = "string"
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    DATE = "date"


class ValueColumn(str, Enum):
    """Typed columns of a value row, in reconstruction fallback order."""

    STRING = "value_string"
    NUMBER = "value_number"
    TEXT = "value_text"
    BOOLEAN = "value_boolean"
    DATE = "value_date"


class Semester(str, Enum):
    FALL = "Fall"
    SPRING = "Spring"
    SUMMER = "Summer"
