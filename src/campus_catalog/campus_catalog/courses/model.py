from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ..core.enums import DataType

# Typed EAV attributes of a course (subject_id is a first-class column).
COURSE_ATTRIBUTE_TYPES: Dict[str, DataType] = {
    "semester": DataType.STRING,
    "year": DataType.NUMBER,
    "instructor_id": DataType.NUMBER,
    "max_enrollment": DataType.NUMBER,
    "current_enrollment": DataType.NUMBER,
    "schedule": DataType.TEXT,
    "prerequisites": DataType.TEXT,
    "corequisites": DataType.TEXT,
    "lab_required": DataType.BOOLEAN,
    "lab_hours": DataType.NUMBER,
    "grading_rubric": DataType.TEXT,
    "assessment_types": DataType.TEXT,
    "attendance_policy": DataType.TEXT,
    "online_meeting_link": DataType.STRING,
    "syllabus_url": DataType.STRING,
    "office_hours": DataType.STRING,
    "textbook_title": DataType.STRING,
    "textbook_author": DataType.STRING,
    "textbook_isbn": DataType.STRING,
    "textbook_required": DataType.BOOLEAN,
    "start_date": DataType.DATE,
    "end_date": DataType.DATE,
}


@dataclass(frozen=True)
class Course:
    """Domain entity: one course offering.

    Note: pure data object; ``extra`` carries attributes outside the known set.
    """

    course_id: int
    name: str
    subject_id: Optional[int]
    is_active: bool = True
    semester: Optional[str] = None
    year: Optional[int] = None
    instructor_id: Optional[int] = None
    max_enrollment: Optional[int] = None
    current_enrollment: Optional[int] = None
    schedule: Any = None
    prerequisites: Any = None
    corequisites: Any = None
    lab_required: Optional[bool] = None
    lab_hours: Optional[float] = None
    grading_rubric: Any = None
    assessment_types: Any = None
    attendance_policy: Any = None
    online_meeting_link: Optional[str] = None
    syllabus_url: Optional[str] = None
    office_hours: Optional[str] = None
    textbook_title: Optional[str] = None
    textbook_author: Optional[str] = None
    textbook_isbn: Optional[str] = None
    textbook_required: Optional[bool] = None
    start_date: Any = None
    end_date: Any = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def seats_left(self) -> Optional[int]:
        if self.max_enrollment is None:
            return None
        return max(0, int(self.max_enrollment) - int(self.current_enrollment or 0))
