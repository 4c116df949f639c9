from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..common.validators import require_non_empty, require_non_negative_int, require_positive_int
from ..core.constants import DEFAULT_MAX_ENROLLMENT, DEFAULT_PAGE_SIZE
from ..core.enums import Semester
from ..core.exceptions import ValidationError
from ..eav.model import EntityRecord, build_attribute_specs
from ..eav.repository import EavRepository
from .model import COURSE_ATTRIBUTE_TYPES, Course

_FIRST_CLASS = ("entity_id", "name", "is_active", "created_at", "updated_at", "subject_id")


def _opt_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def map_course_record(record: Optional[EntityRecord]) -> Optional[Course]:
    if not record:
        return None

    known = {name: record.get(name) for name in COURSE_ATTRIBUTE_TYPES}
    extra = {k: v for k, v in record.items() if k not in known and k not in _FIRST_CLASS}

    for int_field in ("year", "instructor_id", "max_enrollment", "current_enrollment"):
        known[int_field] = _opt_int(known[int_field])

    return Course(
        course_id=int(record["entity_id"]),
        name=record["name"],
        subject_id=_opt_int(record.get("subject_id")),
        is_active=bool(record.get("is_active", True)),
        created_at=record.get("created_at"),
        updated_at=record.get("updated_at"),
        extra=extra,
        **known,
    )


class CourseCatalogService:
    """Use case: manage course offerings stored in the courses EAV catalog."""

    def __init__(self, courses: EavRepository):
        self._courses = courses

    def _validate(self, data: Mapping[str, Any], existing: Optional[Course] = None) -> None:
        """Check a create payload, or a patch merged over ``existing``."""
        if data.get("semester") is not None:
            try:
                Semester(data["semester"])
            except ValueError:
                allowed = ", ".join(s.value for s in Semester)
                raise ValidationError(f"Semester must be one of: {allowed}") from None
        if data.get("year") is not None:
            require_positive_int(data["year"], "Year")
        if data.get("max_enrollment") is not None:
            require_positive_int(data["max_enrollment"], "Max enrollment")
        if data.get("current_enrollment") is not None:
            require_non_negative_int(data["current_enrollment"], "Current enrollment")

        if "max_enrollment" in data:
            max_enrollment = data["max_enrollment"]
        else:
            max_enrollment = existing.max_enrollment if existing else None
        if "current_enrollment" in data:
            current = data["current_enrollment"]
        else:
            current = existing.current_enrollment if existing else None

        if current is not None and max_enrollment is not None and int(current) > int(max_enrollment):
            raise ValidationError("Current enrollment exceeds max enrollment")

    def create_course(self, data: Mapping[str, Any]) -> Course:
        data = dict(data)
        if data.get("max_enrollment") is None:
            data["max_enrollment"] = DEFAULT_MAX_ENROLLMENT
        if data.get("current_enrollment") is None:
            data["current_enrollment"] = 0
        self._validate(data)

        name = data.get("name") or f"Course {data.get('semester') or ''} {data.get('year') or ''}".strip()
        name = require_non_empty(" ".join(name.split()), "Course name")

        fields: Dict[str, Any] = {"is_active": data.get("is_active", True)}
        if data.get("subject_id") is not None:
            fields["subject_id"] = int(data["subject_id"])

        course_id = self._courses.create_entity(
            name,
            fields,
            build_attribute_specs(data, COURSE_ATTRIBUTE_TYPES),
        )
        course = self.get_course(course_id)
        if course is None:
            raise ValidationError("Course creation failed")
        return course

    def get_course(self, course_id: int) -> Optional[Course]:
        return map_course_record(self._courses.get_entity_by_id(int(course_id)))

    def list_courses(
        self,
        *,
        search: str = "",
        subject_id: Optional[int] = None,
        semester: Optional[str] = None,
        year: Optional[int] = None,
        instructor_id: Optional[int] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Tuple[List[Course], int]:
        page = require_positive_int(page, "Page")
        limit = require_positive_int(limit, "Limit")

        courses = [map_course_record(r) for r in self._courses.get_all_entities(include_inactive=True)]

        if search:
            needle = search.lower()
            courses = [
                c
                for c in courses
                if needle in c.name.lower()
                or needle in str(c.schedule or "").lower()
                or needle in str(c.semester or "").lower()
            ]
        if subject_id is not None:
            courses = [c for c in courses if c.subject_id == int(subject_id)]
        if semester:
            courses = [c for c in courses if c.semester == semester]
        if year is not None:
            courses = [c for c in courses if c.year == int(year)]
        if instructor_id is not None:
            courses = [c for c in courses if c.instructor_id == int(instructor_id)]
        if is_active is not None:
            courses = [c for c in courses if c.is_active == bool(is_active)]

        total = len(courses)
        start = (page - 1) * limit
        return courses[start : start + limit], total

    def list_courses_by_subject(self, subject_id: int) -> List[Course]:
        records = self._courses.get_all_entities(parent_id=int(subject_id))
        return [map_course_record(r) for r in records]

    def update_course(self, course_id: int, data: Mapping[str, Any]) -> Optional[Course]:
        existing = self.get_course(course_id)
        if existing is None:
            return None
        self._validate(data, existing)

        updates: Dict[str, Any] = {"attributes": build_attribute_specs(data, COURSE_ATTRIBUTE_TYPES)}
        if data.get("name"):
            updates["name"] = data["name"]
        if data.get("is_active") is not None:
            updates["is_active"] = bool(data["is_active"])
        if "subject_id" in data:
            updates["subject_id"] = _opt_int(data["subject_id"])

        return map_course_record(self._courses.update_entity(int(course_id), updates))

    def delete_course(self, course_id: int) -> bool:
        course = self.get_course(course_id)
        if course is None:
            return False
        if (course.current_enrollment or 0) > 0:
            raise ValidationError("Cannot delete course with active enrollments")
        return self._courses.delete_entity(int(course_id))
