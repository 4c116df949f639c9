from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

import mysql.connector
from mysql.connector import errorcode

from ..common.validators import require_attribute_name, require_non_empty
from ..core.enums import DataType, ValueColumn
from ..core.exceptions import DuplicateAttributeError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .codec_factory import ValueCodecFactory, coerce_data_type
from .descriptions import AttributeDescriber
from .model import Attribute, AttributeSpec, EavTables, EntityRecord
from .reconstruction import reconstruct, reconstruct_many
from .repository import EavRepository


def _like_pattern(term: str) -> str:
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class MySQLEavRepository(EavRepository):
    def __init__(
        self,
        conn_factory: DatabaseConnection,
        tables: EavTables,
        *,
        describer: Optional[AttributeDescriber] = None,
        codecs: Optional[ValueCodecFactory] = None,
    ):
        self._conn_factory = conn_factory
        self._tables = tables
        self._describer = describer or AttributeDescriber()
        self._codecs = codecs or ValueCodecFactory()

    @property
    def tables(self) -> EavTables:
        return self._tables

    # -------- Attribute registry --------
    def get_or_create_attribute(self, attribute_name: str, data_type: Union[DataType, str, None] = DataType.STRING) -> int:
        attribute_name = require_attribute_name(attribute_name)
        data_type = coerce_data_type(data_type)
        with db_cursor(self._conn_factory) as (_, cur):
            return self._resolve_attribute(cur, attribute_name, data_type).attribute_id

    def get_attribute(self, attribute_name: str) -> Optional[Attribute]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._find_attribute(cur, attribute_name)

    def get_all_attributes(self) -> Sequence[Attribute]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attribute_id, attribute_name, data_type, description, created_at
                FROM {self._tables.attributes}
                ORDER BY attribute_name
                """
            )
            return [self._to_attribute(r) for r in fetchall(cur)]

    def _to_attribute(self, row: Mapping[str, Any]) -> Attribute:
        return Attribute(
            attribute_id=int(row["attribute_id"]),
            attribute_name=row["attribute_name"],
            data_type=DataType(row["data_type"]),
            description=row.get("description"),
            created_at=row.get("created_at"),
        )

    def _find_attribute(self, cur, attribute_name: str, *, locking: bool = False) -> Optional[Attribute]:
        # A locking read sees rows committed after this transaction's snapshot.
        lock = " LOCK IN SHARE MODE" if locking else ""
        cur.execute(
            f"""
            SELECT attribute_id, attribute_name, data_type, description, created_at
            FROM {self._tables.attributes}
            WHERE attribute_name=%s{lock}
            """,
            (attribute_name,),
        )
        row = fetchone(cur)
        return self._to_attribute(row) if row else None

    def _resolve_attribute(self, cur, attribute_name: str, data_type: DataType) -> Attribute:
        existing = self._find_attribute(cur, attribute_name)
        if existing:
            return existing

        description = self._describer.describe(attribute_name)
        try:
            cur.execute(
                f"""
                INSERT INTO {self._tables.attributes}(attribute_name, data_type, description)
                VALUES(%s,%s,%s)
                """,
                (attribute_name, data_type.value, description),
            )
        except mysql.connector.IntegrityError as exc:
            if exc.errno != errorcode.ER_DUP_ENTRY:
                raise
            winner = self._find_attribute(cur, attribute_name, locking=True)
            if winner is None:
                raise DuplicateAttributeError(attribute_name) from exc
            return winner

        return Attribute(
            attribute_id=int(cur.lastrowid),
            attribute_name=attribute_name,
            data_type=data_type,
            description=description,
        )

    # -------- Entities --------
    def _entity_columns(self, alias: str = "") -> str:
        prefix = f"{alias}." if alias else ""
        columns = ["entity_id", "name", "is_active", "created_at", "updated_at"]
        if self._tables.parent_column:
            columns.append(self._tables.parent_column)
        return ", ".join(prefix + c for c in columns)

    def create_entity(
        self,
        name: str,
        fields: Optional[Mapping[str, Any]] = None,
        attributes: Optional[Mapping[str, AttributeSpec]] = None,
    ) -> int:
        name = require_non_empty(name, "Entity name")
        fields = dict(fields or {})
        planned = self._plan_attributes(attributes or {})

        columns = ["name", "is_active", "created_at", "updated_at"]
        placeholders = ["%s", "%s", "NOW()", "NOW()"]
        params: List[Any] = [name, 1 if fields.get("is_active", True) else 0]

        parent = self._tables.parent_column
        if parent and fields.get(parent) is not None:
            columns.append(parent)
            placeholders.append("%s")
            params.append(int(fields[parent]))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {self._tables.entities}({', '.join(columns)}) VALUES({', '.join(placeholders)})",
                tuple(params),
            )
            entity_id = int(cur.lastrowid)
            for attribute_name, value, data_type in planned:
                self._write_value(cur, entity_id, attribute_name, value, data_type)
            return entity_id

    def _fetch_entity_row(self, cur, entity_id: int) -> Optional[dict]:
        cur.execute(
            f"SELECT {self._entity_columns()} FROM {self._tables.entities} WHERE entity_id=%s",
            (int(entity_id),),
        )
        return fetchone(cur)

    def _fetch_value_rows(self, cur, entity_ids: Sequence[int]) -> List[dict]:
        if not entity_ids:
            return []
        placeholders = ", ".join(["%s"] * len(entity_ids))
        cur.execute(
            f"""
            SELECT v.entity_id, a.attribute_name, a.data_type,
                   v.value_string, v.value_number, v.value_text, v.value_boolean, v.value_date
            FROM {self._tables.values} v
            JOIN {self._tables.attributes} a ON a.attribute_id = v.attribute_id
            WHERE v.entity_id IN ({placeholders})
            ORDER BY v.entity_id, v.attribute_id
            """,
            tuple(int(i) for i in entity_ids),
        )
        return fetchall(cur)

    def _read_entity(self, cur, entity_id: int) -> Optional[EntityRecord]:
        row = self._fetch_entity_row(cur, entity_id)
        if not row:
            return None
        return reconstruct(
            row,
            self._fetch_value_rows(cur, [int(row["entity_id"])]),
            tables=self._tables,
            codecs=self._codecs,
        )

    def _read_entities(self, cur, rows: Sequence[dict]) -> List[EntityRecord]:
        value_rows = self._fetch_value_rows(cur, [int(r["entity_id"]) for r in rows])
        return reconstruct_many(rows, value_rows, tables=self._tables, codecs=self._codecs)

    def get_entity_by_id(self, entity_id: int) -> Optional[EntityRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._read_entity(cur, entity_id)

    def get_all_entities(self, include_inactive: bool = False, *, parent_id: Optional[int] = None) -> Sequence[EntityRecord]:
        clauses = ["1=1"]
        params: List[Any] = []

        if not include_inactive:
            clauses.append("is_active = 1")
        if parent_id is not None:
            if not self._tables.parent_column:
                raise ValidationError(f"{self._tables.entities} has no parent column")
            clauses.append(f"{self._tables.parent_column}=%s")
            params.append(int(parent_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {self._entity_columns()}
                FROM {self._tables.entities}
                WHERE {where}
                ORDER BY created_at DESC, entity_id DESC
                """,
                tuple(params),
            )
            return self._read_entities(cur, fetchall(cur))

    def update_entity(self, entity_id: int, updates: Mapping[str, Any]) -> Optional[EntityRecord]:
        planned = self._plan_attributes(updates.get("attributes") or {})

        sets: List[str] = []
        params: List[Any] = []

        if updates.get("name") is not None:
            sets.append("name=%s")
            params.append(require_non_empty(updates["name"], "Entity name"))
        if updates.get("is_active") is not None:
            sets.append("is_active=%s")
            params.append(1 if updates["is_active"] else 0)
        parent = self._tables.parent_column
        if parent and parent in updates:
            sets.append(f"{parent}=%s")
            params.append(None if updates[parent] is None else int(updates[parent]))
        sets.append("updated_at=NOW()")

        with db_cursor(self._conn_factory) as (_, cur):
            if self._fetch_entity_row(cur, entity_id) is None:
                return None

            cur.execute(
                f"UPDATE {self._tables.entities} SET {', '.join(sets)} WHERE entity_id=%s",
                tuple(params + [int(entity_id)]),
            )
            for attribute_name, value, data_type in planned:
                self._write_value(cur, int(entity_id), attribute_name, value, data_type)

            return self._read_entity(cur, entity_id)

    def delete_entity(self, entity_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._tables.values} WHERE entity_id=%s", (int(entity_id),))
            cur.execute(f"DELETE FROM {self._tables.entities} WHERE entity_id=%s", (int(entity_id),))
            return cur.rowcount > 0

    # -------- Values --------
    def _plan_attributes(self, attributes: Mapping[str, AttributeSpec]) -> List[Tuple[str, Any, DataType]]:
        """Validate a ``{name: {"value", "type"}}`` batch before any write."""
        planned: List[Tuple[str, Any, DataType]] = []
        for attribute_name, spec in attributes.items():
            if not isinstance(spec, Mapping):
                raise ValidationError(f"Attribute {attribute_name!r} must be a mapping with 'value' and 'type'")
            if "value" not in spec:
                continue
            planned.append((require_attribute_name(attribute_name), spec["value"], coerce_data_type(spec.get("type"))))
        return planned

    def _write_value(self, cur, entity_id: int, attribute_name: str, value: Any, data_type: DataType) -> None:
        attribute = self._resolve_attribute(cur, attribute_name, data_type)

        if value is None:
            cur.execute(
                f"DELETE FROM {self._tables.values} WHERE entity_id=%s AND attribute_id=%s",
                (int(entity_id), attribute.attribute_id),
            )
            return

        # The stored attribute type decides the column, not the caller's.
        typed = self._codecs.encode(attribute.data_type, value)
        column = typed.column.value
        set_null = ", ".join(f"{c.value} = NULL" for c in ValueColumn if c != typed.column)
        cur.execute(
            f"""
            INSERT INTO {self._tables.values}(entity_id, attribute_id, {column})
            VALUES(%s,%s,%s)
            ON DUPLICATE KEY UPDATE {column} = VALUES({column}), {set_null}
            """,
            (int(entity_id), attribute.attribute_id, typed.stored),
        )

    def set_attribute_value(
        self,
        entity_id: int,
        attribute_name: str,
        value: Any,
        data_type: Union[DataType, str, None] = None,
    ) -> None:
        attribute_name = require_attribute_name(attribute_name)
        data_type = coerce_data_type(data_type)
        with db_cursor(self._conn_factory) as (_, cur):
            self._write_value(cur, int(entity_id), attribute_name, value, data_type)

    def set_entity_attributes(
        self,
        entity_id: int,
        attributes: Mapping[str, AttributeSpec],
        *,
        atomic: bool = False,
    ) -> None:
        planned = self._plan_attributes(attributes)
        if atomic:
            with db_cursor(self._conn_factory) as (_, cur):
                for attribute_name, value, data_type in planned:
                    self._write_value(cur, int(entity_id), attribute_name, value, data_type)
            return

        for attribute_name, value, data_type in planned:
            with db_cursor(self._conn_factory) as (_, cur):
                self._write_value(cur, int(entity_id), attribute_name, value, data_type)

    # -------- Search --------
    def search_entities(self, search_term: str, attribute_name: Optional[str] = None) -> Sequence[EntityRecord]:
        clauses = ["e.is_active = 1"]
        params: List[Any] = []

        if attribute_name:
            clauses.append("a.attribute_name=%s")
            params.append(attribute_name)

        if search_term:
            clauses.append(
                "(LOWER(e.name) LIKE %s OR LOWER(v.value_string) LIKE %s OR LOWER(v.value_text) LIKE %s)"
            )
            pattern = _like_pattern(search_term)
            params.extend([pattern, pattern, pattern])

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT DISTINCT {self._entity_columns('e')}
                FROM {self._tables.entities} e
                JOIN {self._tables.values} v ON v.entity_id = e.entity_id
                JOIN {self._tables.attributes} a ON a.attribute_id = v.attribute_id
                WHERE {where}
                ORDER BY e.created_at DESC, e.entity_id DESC
                """,
                tuple(params),
            )
            return self._read_entities(cur, fetchall(cur))
