from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "campus_catalog"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import load_settings

from campus_catalog.container import build_container
from campus_catalog.core.exceptions import ValidationError
from campus_catalog.database.bootstrap import apply_schema

DEMO_SUBJECTS = [
    {
        "name": "Introduction to Computer Science",
        "code": "CS101",
        "credits": 3,
        "classification": "core",
        "lab_required": True,
        "lab_hours": 2,
        "learning_outcomes": ["Write small programs", "Reason about algorithms"],
    },
    {
        "name": "Data Structures",
        "code": "CS201",
        "credits": 4,
        "classification": "core",
        "prerequisites": "CS101",
    },
    {
        "name": "Technical Writing",
        "code": "EN210",
        "credits": 2,
        "classification": "elective",
    },
]

DEMO_COURSES = {
    "CS101": [
        {"semester": "Fall", "year": 2026, "instructor_id": 7, "schedule": {"days": ["Mon", "Wed"], "time": "09:00"}},
        {"semester": "Spring", "year": 2027, "instructor_id": 7, "max_enrollment": 60},
    ],
    "CS201": [
        {"semester": "Spring", "year": 2027, "instructor_id": 9, "textbook_title": "Algorithms", "textbook_required": True},
    ],
}


def main() -> None:
    settings = load_settings()
    db_config = dict(settings.DB_CONFIG)

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    container = build_container(db_config=db_config)

    created = 0
    for data in DEMO_SUBJECTS:
        try:
            subject = container.subject_service.create_subject(data)
        except ValidationError as exc:
            # Already seeded.
            print(f"skip {data['code']}: {exc}")
            continue

        for course in DEMO_COURSES.get(subject.code or "", []):
            container.course_service.create_course(
                {
                    "name": f"{subject.code} {course['semester']} {course['year']}",
                    "subject_id": subject.subject_id,
                    **course,
                }
            )
            created += 1

    print(
        f"OK: Seeded {created} courses -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
