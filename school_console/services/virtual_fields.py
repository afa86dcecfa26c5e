# /school_console/services/virtual_fields.py

"""
Derives the read-only presentation fields shown next to server data.

Everything here is a pure function of the record (and, for ages, of "today").
Virtual fields are regenerated on every load and are stripped from anything
sent back to the server.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional, Type

from ..models.class_model import SchoolClass
from ..models.course_model import Course
from ..models.department_model import Department
from ..models.entity_model import EntityRecord
from ..models.resource_model import ResourceType
from ..models.student_model import Student

ALMOST_FULL_RATIO = 0.8

RESOURCE_MODELS: Dict[ResourceType, Type[EntityRecord]] = {
    ResourceType.STUDENT: Student,
    ResourceType.CLASS: SchoolClass,
    ResourceType.DEPARTMENT: Department,
    ResourceType.COURSE: Course,
}


# --- Scalar helpers ---

def _to_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def calculate_age(date_of_birth: Any, today: Optional[date] = None) -> int:
    """Whole years since `date_of_birth`; 0 when it is missing or unparseable."""
    dob = _to_date(date_of_birth)
    if dob is None:
        return 0
    today = today or date.today()
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age


def full_address(address: Any) -> str:
    if not address:
        return ""
    if not isinstance(address, dict):
        address = address.model_dump()
    parts = [address.get(key) for key in ("street", "city", "state", "zipCode", "country")]
    return ", ".join(part.strip() for part in parts if isinstance(part, str) and part.strip())


def department_age(establishment_year: Optional[int], today: Optional[date] = None) -> int:
    if not establishment_year:
        return 0
    return (today or date.today()).year - int(establishment_year)


def _seat_figures(capacity: int, occupied: int) -> Dict[str, Any]:
    capacity = capacity or 0
    occupied = occupied or 0
    rate = (occupied / capacity) * 100 if capacity > 0 else 0.0
    return {
        "availableSeats": capacity - occupied,
        "isFull": occupied >= capacity,
        "rate": rate,
    }


# --- Per-resource computers ---

def student_fields(record: Student, today: Optional[date] = None) -> Dict[str, Any]:
    return {
        "age": calculate_age(record.dateOfBirth, today),
        "fullAddress": full_address(record.address),
    }


def class_fields(record: SchoolClass) -> Dict[str, Any]:
    seats = _seat_figures(record.capacity, record.currentStrength)
    if seats["isFull"]:
        seat_status = "full"
    elif record.capacity > 0 and record.currentStrength >= record.capacity * ALMOST_FULL_RATIO:
        seat_status = "almost-full"
    else:
        seat_status = "open"
    return {
        "classCode": f"{record.className or ''}-{record.section or ''}",
        "availableSeats": seats["availableSeats"],
        "isFull": seats["isFull"],
        "utilization": seats["rate"],
        "seatStatus": seat_status,
    }


def department_fields(record: Department, today: Optional[date] = None) -> Dict[str, Any]:
    return {"age": department_age(record.establishmentYear, today)}


def course_fields(record: Course) -> Dict[str, Any]:
    seats = _seat_figures(record.maxStudents, record.enrolledStudents)
    return {
        "availableSeats": seats["availableSeats"],
        "isFull": seats["isFull"],
        "enrollmentRate": seats["rate"],
    }


def parse_record(resource: ResourceType, raw: Any) -> EntityRecord:
    """Validates one raw server item into the resource's model."""
    model = RESOURCE_MODELS[resource]
    if isinstance(raw, model):
        return raw
    return model.model_validate(raw)


def apply_virtual_fields(resource: ResourceType, record: Any, today: Optional[date] = None) -> EntityRecord:
    """Returns a copy of `record` with every virtual field regenerated."""
    record = parse_record(resource, record)
    if resource is ResourceType.STUDENT:
        update = student_fields(record, today)
    elif resource is ResourceType.CLASS:
        update = class_fields(record)
    elif resource is ResourceType.DEPARTMENT:
        update = department_fields(record, today)
    else:
        update = course_fields(record)
    return record.model_copy(update=update)


def strip_virtual_fields(resource: ResourceType, payload: Dict[str, Any]) -> Dict[str, Any]:
    virtual = RESOURCE_MODELS[resource].VIRTUAL_FIELDS
    return {key: value for key, value in payload.items() if key not in virtual}
