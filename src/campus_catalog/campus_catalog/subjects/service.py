from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..eav.model import EntityRecord, build_attribute_specs
from ..eav.repository import EavRepository
from .model import SUBJECT_ATTRIBUTE_TYPES, SUBJECT_CLASSIFICATIONS, Subject

_FIRST_CLASS = ("entity_id", "name", "is_active", "created_at", "updated_at", "department_id")


def map_subject_record(record: Optional[EntityRecord]) -> Optional[Subject]:
    if not record:
        return None

    known = {name: record.get(name) for name in SUBJECT_ATTRIBUTE_TYPES}
    extra = {k: v for k, v in record.items() if k not in known and k not in _FIRST_CLASS}
    department_id = record.get("department_id")

    return Subject(
        subject_id=int(record["entity_id"]),
        name=record["name"],
        department_id=None if department_id is None else int(department_id),
        is_active=bool(record.get("is_active", True)),
        created_at=record.get("created_at"),
        updated_at=record.get("updated_at"),
        extra=extra,
        **known,
    )


class SubjectCatalogService:
    """Use case: manage catalog subjects (code, credits, classification, ...)."""

    def __init__(self, subjects: EavRepository):
        self._subjects = subjects

    def _validate(self, data: Mapping[str, Any]) -> None:
        classification = data.get("classification")
        if classification is not None and classification not in SUBJECT_CLASSIFICATIONS:
            raise ValidationError(f"Classification must be one of: {', '.join(SUBJECT_CLASSIFICATIONS)}")

        credits = data.get("credits")
        if credits is not None:
            try:
                ok = float(credits) > 0
            except (TypeError, ValueError):
                ok = False
            if not ok:
                raise ValidationError("Credits must be a positive number")

    def _find_by_code(self, code: str) -> Optional[EntityRecord]:
        wanted = code.strip().lower()
        for record in self._subjects.get_all_entities(include_inactive=True):
            if str(record.get("code") or "").strip().lower() == wanted:
                return record
        return None

    def create_subject(self, data: Mapping[str, Any]) -> Subject:
        data = dict(data)
        name = require_non_empty(data.get("name") or "", "Subject name")
        data["code"] = require_non_empty(data.get("code") or "", "Subject code").upper()
        self._validate(data)

        if self._find_by_code(data["code"]):
            raise ValidationError(f"Subject code {data['code']} already exists")

        fields: Dict[str, Any] = {"is_active": data.get("is_active", True)}
        if data.get("department_id") is not None:
            fields["department_id"] = int(data["department_id"])

        subject_id = self._subjects.create_entity(
            name,
            fields,
            build_attribute_specs(data, SUBJECT_ATTRIBUTE_TYPES),
        )
        subject = self.get_subject(subject_id)
        if subject is None:
            raise ValidationError("Subject creation failed")
        return subject

    def get_subject(self, subject_id: int) -> Optional[Subject]:
        return map_subject_record(self._subjects.get_entity_by_id(int(subject_id)))

    def list_subjects(
        self,
        *,
        department_id: Optional[int] = None,
        include_inactive: bool = False,
    ) -> List[Subject]:
        records = self._subjects.get_all_entities(include_inactive=include_inactive, parent_id=department_id)
        return [map_subject_record(r) for r in records]

    def search_subjects(self, term: str, *, attribute_name: Optional[str] = None) -> List[Subject]:
        return [map_subject_record(r) for r in self._subjects.search_entities(term or "", attribute_name)]

    def update_subject(self, subject_id: int, data: Mapping[str, Any]) -> Optional[Subject]:
        data = dict(data)
        if "code" in data:
            data["code"] = require_non_empty(data["code"] or "", "Subject code").upper()
            other = self._find_by_code(data["code"])
            if other and int(other["entity_id"]) != int(subject_id):
                raise ValidationError(f"Subject code {data['code']} already exists")
        self._validate(data)

        updates: Dict[str, Any] = {"attributes": build_attribute_specs(data, SUBJECT_ATTRIBUTE_TYPES)}
        if data.get("name"):
            updates["name"] = data["name"]
        if data.get("is_active") is not None:
            updates["is_active"] = bool(data["is_active"])
        if "department_id" in data:
            department_id = data["department_id"]
            updates["department_id"] = None if department_id is None else int(department_id)

        return map_subject_record(self._subjects.update_entity(int(subject_id), updates))

    def delete_subject(self, subject_id: int) -> bool:
        return self._subjects.delete_entity(int(subject_id))
