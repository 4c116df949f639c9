from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from campus_catalog.core.exceptions import ValidationError
from campus_catalog.eav.codec_factory import ValueCodecFactory, coerce_data_type
from campus_catalog.eav.model import Attribute


class InMemoryEavRepository:
    """Dict-backed EavRepository with the same write/read semantics as MySQL."""

    def __init__(self, parent_column=None):
        self.parent_column = parent_column
        self.codecs = ValueCodecFactory()
        self.attributes = {}
        self.entities = {}
        self.values = {}
        self._next_entity = 1
        self._clock = datetime(2026, 1, 1, 8, 0, 0)

    def _tick(self):
        self._clock += timedelta(seconds=1)
        return self._clock

    def get_or_create_attribute(self, attribute_name, data_type="string"):
        data_type = coerce_data_type(data_type)
        if attribute_name not in self.attributes:
            self.attributes[attribute_name] = Attribute(
                attribute_id=len(self.attributes) + 1,
                attribute_name=attribute_name,
                data_type=data_type,
            )
        return self.attributes[attribute_name].attribute_id

    def get_all_attributes(self):
        return sorted(self.attributes.values(), key=lambda a: a.attribute_name)

    def create_entity(self, name, fields=None, attributes=None):
        if not name or not name.strip():
            raise ValidationError("Entity name must not be empty")
        fields = dict(fields or {})
        entity_id = self._next_entity
        self._next_entity += 1
        now = self._tick()
        row = {
            "entity_id": entity_id,
            "name": name,
            "is_active": bool(fields.get("is_active", True)),
            "created_at": now,
            "updated_at": now,
        }
        if self.parent_column:
            row[self.parent_column] = fields.get(self.parent_column)
        self.entities[entity_id] = row
        if attributes:
            self.set_entity_attributes(entity_id, attributes)
        return entity_id

    def get_entity_by_id(self, entity_id):
        row = self.entities.get(int(entity_id))
        if row is None:
            return None
        record = dict(row)
        for (eid, name), typed in self.values.items():
            if eid == row["entity_id"]:
                record[name] = self.codecs.for_column(typed.column).from_storage(typed.stored)
        return record

    def get_all_entities(self, include_inactive=False, *, parent_id=None):
        rows = sorted(self.entities.values(), key=lambda r: (r["created_at"], r["entity_id"]), reverse=True)
        if not include_inactive:
            rows = [r for r in rows if r["is_active"]]
        if parent_id is not None:
            rows = [r for r in rows if r.get(self.parent_column) == parent_id]
        return [self.get_entity_by_id(r["entity_id"]) for r in rows]

    def update_entity(self, entity_id, updates):
        row = self.entities.get(int(entity_id))
        if row is None:
            return None
        if updates.get("name") is not None:
            row["name"] = updates["name"]
        if updates.get("is_active") is not None:
            row["is_active"] = bool(updates["is_active"])
        if self.parent_column and self.parent_column in updates:
            row[self.parent_column] = updates[self.parent_column]
        row["updated_at"] = self._tick()
        if updates.get("attributes"):
            self.set_entity_attributes(entity_id, updates["attributes"])
        return self.get_entity_by_id(entity_id)

    def delete_entity(self, entity_id):
        for key in [k for k in self.values if k[0] == int(entity_id)]:
            del self.values[key]
        return self.entities.pop(int(entity_id), None) is not None

    def set_attribute_value(self, entity_id, attribute_name, value, data_type=None):
        data_type = coerce_data_type(data_type)
        self.get_or_create_attribute(attribute_name, data_type)
        key = (int(entity_id), attribute_name)
        if value is None:
            self.values.pop(key, None)
            return
        stored_type = self.attributes[attribute_name].data_type
        self.values[key] = self.codecs.encode(stored_type, value)

    def set_entity_attributes(self, entity_id, attributes, *, atomic=False):
        for name, spec in attributes.items():
            if "value" in spec:
                self.set_attribute_value(entity_id, name, spec["value"], spec.get("type"))

    def search_entities(self, search_term, attribute_name=None):
        needle = (search_term or "").lower()
        out = []
        for record in self.get_all_entities():
            keys = [k for k in self.values if k[0] == record["entity_id"]]
            if attribute_name:
                keys = [k for k in keys if k[1] == attribute_name]
            if not keys:
                continue
            if needle:
                texts = [record["name"]] + [
                    str(self.values[k].stored)
                    for k in keys
                    if self.values[k].column.value in ("value_string", "value_text")
                ]
                if not any(needle in t.lower() for t in texts):
                    continue
            out.append(record)
        return out


@pytest.fixture
def course_repo():
    return InMemoryEavRepository(parent_column="subject_id")


@pytest.fixture
def subject_repo():
    return InMemoryEavRepository(parent_column="department_id")
