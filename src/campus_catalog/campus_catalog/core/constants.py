"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_POOL_SIZE = 5
DEFAULT_PAGE_SIZE = 50
DEFAULT_MAX_ENROLLMENT = 30
MAX_ATTRIBUTE_NAME_LENGTH = 100

COURSE_ATTRIBUTE_DESCRIPTIONS = {
    "subject_id": "Subject ID that this course is based on",
    "semester": "Semester (Fall, Spring, Summer)",
    "year": "Academic year",
    "instructor_id": "Instructor user ID",
    "max_enrollment": "Maximum enrollment capacity",
    "current_enrollment": "Current number of enrolled students",
    "schedule": "Course schedule details",
    "prerequisites": "Course-specific prerequisites",
    "corequisites": "Course-specific corequisites",
    "lab_required": "Whether lab is required for this course",
    "lab_hours": "Lab hours per week for this course",
    "grading_rubric": "Grading rubric for the course",
    "assessment_types": "Types of assessments used",
    "attendance_policy": "Attendance policy for this course",
    "online_meeting_link": "Online meeting URL",
    "syllabus_url": "URL to course syllabus",
    "office_hours": "Instructor office hours",
    "textbook_title": "Required textbook title",
    "textbook_author": "Textbook author",
    "textbook_isbn": "Textbook ISBN",
    "textbook_required": "Whether textbook is required",
}

SUBJECT_ATTRIBUTE_DESCRIPTIONS = {
    "code": "Subject code identifier",
    "credits": "Number of credit hours",
    "description": "Subject description",
    "classification": "Subject classification (core/elective)",
    "semester": "Typical semester offering",
    "academic_year": "Academic year",
    "department_id": "Department ID",
    "prerequisites": "Prerequisites for the subject",
    "corequisites": "Corequisites for the subject",
    "learning_outcomes": "Expected learning outcomes",
    "textbooks": "Required or recommended textbooks",
    "lab_required": "Whether lab component is required",
    "lab_hours": "Number of lab hours per week",
    "studio_required": "Whether studio component is required",
    "studio_hours": "Number of studio hours per week",
    "certifications": "Related professional certifications",
    "repeatability": "Repeatability policy",
    "syllabus_template": "Default syllabus template",
    "typical_offering": "Typical offering pattern",
}

# Generated attribute families (equipment_1_name, amenity_3, ...).
PATTERN_ATTRIBUTE_DESCRIPTIONS = (
    (r"^equipment_\d+_name$", "Name of equipment item"),
    (r"^equipment_\d+_quantity$", "Quantity of equipment item"),
    (r"^equipment_\d+_condition$", "Condition of equipment item"),
    (r"^equipment_\d+$", "Equipment identifier"),
    (r"^amenity_\d+$", "Amenity available"),
)
