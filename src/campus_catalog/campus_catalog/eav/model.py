from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..common.validators import require_sql_identifier
from ..core.enums import DataType

# A reconstructed entity: first-class columns plus dynamic attributes.
EntityRecord = Dict[str, Any]

# {"value": ..., "type": "string"}; a missing "value" key means "not provided".
AttributeSpec = Dict[str, Any]


@dataclass(frozen=True)
class Attribute:
    """Entry of the attribute dictionary shared by all entities of a catalog."""

    attribute_id: int
    attribute_name: str
    data_type: DataType
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class EavTables:
    """Names of the three tables backing one EAV catalog.

    ``parent_column`` is the optional first-class foreign key on the entity
    table (e.g. ``subject_id`` for courses).
    """

    entities: str
    attributes: str
    values: str
    parent_column: Optional[str] = None

    def __post_init__(self) -> None:
        require_sql_identifier(self.entities, "Entity table")
        require_sql_identifier(self.attributes, "Attribute table")
        require_sql_identifier(self.values, "Value table")
        if self.parent_column is not None:
            require_sql_identifier(self.parent_column, "Parent column")

    @classmethod
    def with_prefix(cls, prefix: str, *, parent_column: Optional[str] = None) -> "EavTables":
        return cls(
            entities=f"{prefix}_eav_entities",
            attributes=f"{prefix}_eav_attributes",
            values=f"{prefix}_eav_values",
            parent_column=parent_column,
        )


COURSE_TABLES = EavTables.with_prefix("courses", parent_column="subject_id")
SUBJECT_TABLES = EavTables.with_prefix("subjects", parent_column="department_id")


def build_attribute_specs(data: Mapping[str, Any], types: Mapping[str, DataType]) -> Dict[str, AttributeSpec]:
    """Pick the typed attributes present in ``data``.

    Keys absent from ``data`` are left out ("not provided"); keys present
    with ``None`` are kept so the write clears them.
    """
    return {name: {"value": data[name], "type": data_type} for name, data_type in types.items() if name in data}
