# /school_console/services/entity_forms.py

"""
Declarative form schemas for the four managed resources.

These are data, not subclasses: each screen builds its form with
`build_entity_form(resource)` and gets the same engine, the same traversal
and the same submit flow as every other screen.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Tuple

from ..models.resource_model import ResourceType
from .form_helpers import normalizers
from .form_helpers.schema import GroupSpec, array, field, group
from .form_helpers.validators import (
    PATTERNS, email, max_length, max_value, min_length, min_value, one_of, pattern, required,
)
from .form_service import NestedFormModel

STUDENT_STATUSES = ("Active", "Inactive", "Graduated", "Suspended")
CLASS_STATUSES = ("Active", "Inactive", "Completed")
DEPARTMENT_STATUSES = ("Active", "Inactive", "Under Maintenance")
COURSE_STATUSES = ("Active", "Inactive", "Completed", "Cancelled")
GENDERS = ("Male", "Female", "Other")
SEMESTERS = ("Fall", "Spring", "Summer", "Winter")
COURSE_TYPES = ("Core", "Elective", "Lab", "Project", "Thesis")
RESOURCE_TYPES = ("Syllabus", "Notes", "Assignment", "Reference", "Video")
DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _current_year() -> int:
    return date.today().year


def _phone(*extra):
    return field("", *extra, pattern(PATTERNS["PHONE"], "phone number"))


def _contact():
    return {"name": field("", normalize=normalizers.strip), "email": field("", email()), "phone": _phone()}


def _schedule(room_key: str):
    return {
        "days": array(field("", required(), one_of(DAYS))),
        "time": {"start": field(""), "end": field("")},
        room_key: field(""),
    }


STUDENT_SCHEMA = group({
    "name": field("", required(), min_length(3), max_length(100), normalize=normalizers.strip),
    "rollNumber": field("", required(), pattern(PATTERNS["ROLL_NUMBER"], "roll number"), normalize=normalizers.upper),
    "email": field("", required(), email()),
    "phone": _phone(required()),
    "dateOfBirth": field("", required(), normalize=normalizers.iso_date),
    "gender": field("", required(), one_of(GENDERS)),
    "class": field("", required()),
    "department": field("", required()),
    "academicYear": field("", required(), pattern(PATTERNS["ACADEMIC_YEAR"], "academic year")),
    "status": field("Active", required(), one_of(STUDENT_STATUSES)),
    "enrollmentDate": field(None, normalize=normalizers.iso_date),
    "courses": array(field("", required())),
    "address": {
        "street": field("", required()),
        "city": field("", required()),
        "state": field("", required()),
        "zipCode": field("", required(), pattern(PATTERNS["ZIP_CODE"], "zip code")),
        "country": field("India"),
    },
    "guardianInfo": {
        "name": field("", required()),
        "relationship": field("", required()),
        "phone": _phone(required()),
        "email": field("", email()),
    },
})

CLASS_SCHEMA = group({
    "className": field("", required(), pattern(PATTERNS["CLASS_NAME"], "class name"), normalize=normalizers.upper),
    "section": field("", required(), pattern(PATTERNS["SECTION"], "section"), normalize=normalizers.upper),
    "academicYear": field("", required(), pattern(PATTERNS["ACADEMIC_YEAR"], "academic year")),
    "capacity": field("", required(), min_value(1), max_value(100)),
    "currentStrength": field(0, min_value(0)),
    "department": field("", required()),
    "status": field("Active", required(), one_of(CLASS_STATUSES)),
    "description": field("", max_length(500)),
    "classTeacher": _contact(),
    "schedule": _schedule("roomNumber"),
})

DEPARTMENT_SCHEMA = group({
    "departmentName": field("", required(), min_length(2), normalize=normalizers.strip),
    "departmentCode": field("", required(), pattern(PATTERNS["DEPARTMENT_CODE"], "department code"), normalize=normalizers.upper),
    "establishmentYear": field("", required(), min_value(1900), max_value(_current_year)),
    "status": field("Active", required(), one_of(DEPARTMENT_STATUSES)),
    "description": field("", max_length(1000)),
    "totalFaculty": field(0, min_value(0)),
    "totalStudents": field(0, min_value(0)),
    "contactEmail": field("", required(), email()),
    "contactPhone": _phone(required()),
    "headOfDepartment": {
        "name": field("", required()),
        "email": field("", required(), email()),
        "phone": _phone(required()),
        "qualification": field(""),
    },
    "location": {"building": field(""), "floor": field(""), "room": field("")},
    "facilities": array(field("", required())),
})

COURSE_SCHEMA = group({
    "courseName": field("", required(), normalize=normalizers.strip),
    "courseCode": field("", required(), pattern(PATTERNS["COURSE_CODE"], "course code"), normalize=normalizers.upper),
    "creditHours": field("", required(), min_value(1), max_value(6)),
    "description": field("", max_length(1000)),
    "department": field("", required()),
    "semester": field("", required(), one_of(SEMESTERS)),
    "year": field("", required()),
    "maxStudents": field("", required(), min_value(1), max_value(100)),
    "enrolledStudents": field(0, min_value(0)),
    "courseType": field("Core", required(), one_of(COURSE_TYPES)),
    "status": field("Active", required(), one_of(COURSE_STATUSES)),
    "instructor": _contact(),
    "schedule": _schedule("room"),
    "gradingPolicy": {
        part: field(0, min_value(0), max_value(100))
        for part in ("assignments", "midterm", "final", "projects", "attendance")
    },
    "prerequisites": array(field("", required())),
    "resources": array({
        "type": field("Syllabus", required(), one_of(RESOURCE_TYPES)),
        "title": field("", required()),
        "url": field("", required()),
        "uploadedAt": field(None),
    }),
})


@dataclass(frozen=True)
class EntityFormDefinition:
    schema: GroupSpec
    references: Tuple[str, ...]
    label: str


FORM_DEFINITIONS: Dict[ResourceType, EntityFormDefinition] = {
    ResourceType.STUDENT: EntityFormDefinition(STUDENT_SCHEMA, ("class", "department", "courses"), "Student"),
    ResourceType.CLASS: EntityFormDefinition(CLASS_SCHEMA, ("department",), "Class"),
    ResourceType.DEPARTMENT: EntityFormDefinition(DEPARTMENT_SCHEMA, (), "Department"),
    ResourceType.COURSE: EntityFormDefinition(COURSE_SCHEMA, ("department", "prerequisites"), "Course"),
}


def build_entity_form(resource: ResourceType) -> NestedFormModel:
    return NestedFormModel.build(FORM_DEFINITIONS[resource].schema)
