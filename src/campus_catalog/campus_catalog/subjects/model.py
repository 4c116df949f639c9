from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ..core.enums import DataType

# Typed EAV attributes of a subject (department_id is a first-class column).
SUBJECT_ATTRIBUTE_TYPES: Dict[str, DataType] = {
    "code": DataType.STRING,
    "description": DataType.TEXT,
    "credits": DataType.NUMBER,
    "classification": DataType.STRING,
    "semester": DataType.STRING,
    "academic_year": DataType.STRING,
    "prerequisites": DataType.TEXT,
    "corequisites": DataType.TEXT,
    "learning_outcomes": DataType.TEXT,
    "textbooks": DataType.TEXT,
    "lab_required": DataType.BOOLEAN,
    "lab_hours": DataType.NUMBER,
    "studio_required": DataType.BOOLEAN,
    "studio_hours": DataType.NUMBER,
    "certifications": DataType.TEXT,
    "repeatability": DataType.STRING,
    "syllabus_template": DataType.TEXT,
    "typical_offering": DataType.STRING,
}

SUBJECT_CLASSIFICATIONS = ("core", "elective")


@dataclass(frozen=True)
class Subject:
    """Domain entity: a catalog subject that courses are offered from."""

    subject_id: int
    name: str
    code: Optional[str]
    department_id: Optional[int]
    is_active: bool = True
    description: Optional[str] = None
    credits: Optional[float] = None
    classification: Optional[str] = None
    semester: Optional[str] = None
    academic_year: Optional[str] = None
    prerequisites: Any = None
    corequisites: Any = None
    learning_outcomes: Any = None
    textbooks: Any = None
    lab_required: Optional[bool] = None
    lab_hours: Optional[float] = None
    studio_required: Optional[bool] = None
    studio_hours: Optional[float] = None
    certifications: Any = None
    repeatability: Optional[str] = None
    syllabus_template: Any = None
    typical_offering: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    extra: Dict[str, Any] = field(default_factory=dict)
