"""Rebuild flat entity records from entity rows plus joined value rows."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..core.enums import ValueColumn
from ..core.exceptions import InvalidDataTypeError
from ..database.mysql_base import normalize_mysql_bool
from .codec_factory import ValueCodecFactory
from .model import EavTables, EntityRecord


def entity_base(row: Mapping[str, Any], tables: EavTables) -> EntityRecord:
    record: EntityRecord = {
        "entity_id": int(row["entity_id"]),
        "name": row["name"],
        "is_active": bool(normalize_mysql_bool(row.get("is_active"))),
        "created_at": row.get("created_at"),
        "updated_at": row.get("updated_at"),
    }
    if tables.parent_column:
        record[tables.parent_column] = row.get(tables.parent_column)
    return record


def pick_value(row: Mapping[str, Any], codecs: ValueCodecFactory) -> Any:
    """Value of one joined value row.

    Prefer the column of the declared data type; otherwise take the first
    populated column in ``ValueColumn`` order.
    """
    try:
        primary: Optional[ValueColumn] = codecs.for_type(row.get("data_type")).column
    except InvalidDataTypeError:
        primary = None

    if primary is not None and row.get(primary.value) is not None:
        return codecs.for_column(primary).from_storage(row[primary.value])

    for column in ValueColumn:
        raw = row.get(column.value)
        if raw is not None:
            return codecs.for_column(column).from_storage(raw)
    return None


def reconstruct(
    entity_row: Mapping[str, Any],
    value_rows: Iterable[Mapping[str, Any]],
    *,
    tables: EavTables,
    codecs: ValueCodecFactory,
) -> EntityRecord:
    record = entity_base(entity_row, tables)
    # Attributes overwrite same-named first-class columns.
    for row in value_rows:
        record[row["attribute_name"]] = pick_value(row, codecs)
    return record


def group_value_rows(rows: Iterable[Mapping[str, Any]]) -> Dict[int, List[Mapping[str, Any]]]:
    grouped: Dict[int, List[Mapping[str, Any]]] = {}
    for row in rows:
        grouped.setdefault(int(row["entity_id"]), []).append(row)
    return grouped


def reconstruct_many(
    entity_rows: Sequence[Mapping[str, Any]],
    value_rows: Iterable[Mapping[str, Any]],
    *,
    tables: EavTables,
    codecs: ValueCodecFactory,
) -> List[EntityRecord]:
    grouped = group_value_rows(value_rows)
    return [
        reconstruct(row, grouped.get(int(row["entity_id"]), []), tables=tables, codecs=codecs)
        for row in entity_rows
    ]
