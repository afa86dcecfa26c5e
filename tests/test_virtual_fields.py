# /tests/test_virtual_fields.py

from datetime import date

import pytest

from school_console.models.resource_model import ResourceType
from school_console.services import virtual_fields as vf

TODAY = date(2025, 1, 1)


@pytest.mark.parametrize("dob, expected", [
    ("2004-03-15T00:00:00.000Z", 20),
    ("2004-01-01", 21),
    ("2004-12-31", 20),
    (date(2010, 1, 2), 14),
    (None, 0),
    ("", 0),
    ("not-a-date", 0),
])
def test_calculate_age(dob, expected):
    assert vf.calculate_age(dob, TODAY) == expected


def test_student_fields_combine_age_and_address(sample_students):
    student = vf.apply_virtual_fields(ResourceType.STUDENT, sample_students[0], today=TODAY)
    assert student.age == 20
    assert student.fullAddress == "12 Park Lane, Pune, MH, 411001"
    assert student.id == "stu_1"


def test_student_without_birth_date_or_address(sample_students):
    student = vf.apply_virtual_fields(ResourceType.STUDENT, sample_students[1], today=TODAY)
    assert student.age == 0
    assert student.fullAddress == ""


@pytest.mark.parametrize("capacity, strength, seats, is_full, status", [
    (30, 30, 0, True, "full"),
    (30, 25, 5, False, "almost-full"),
    (30, 24, 6, False, "almost-full"),
    (30, 10, 20, False, "open"),
    (30, 35, -5, True, "full"),
])
def test_class_seat_figures(capacity, strength, seats, is_full, status):
    record = {"_id": "cls_1", "className": "CS", "section": "A", "capacity": capacity, "currentStrength": strength}
    school_class = vf.apply_virtual_fields(ResourceType.CLASS, record)
    assert school_class.availableSeats == seats
    assert school_class.isFull is is_full
    assert school_class.seatStatus == status
    assert school_class.classCode == "CS-A"
    assert school_class.utilization == pytest.approx(strength / capacity * 100)


def test_zero_capacity_has_zero_utilization():
    school_class = vf.apply_virtual_fields(ResourceType.CLASS, {"className": "Lab", "capacity": 0})
    assert school_class.utilization == 0
    assert school_class.availableSeats == 0


def test_course_enrollment_rate():
    course = vf.apply_virtual_fields(
        ResourceType.COURSE, {"courseCode": "CS301", "maxStudents": 40, "enrolledStudents": 10}
    )
    assert course.availableSeats == 30
    assert course.isFull is False
    assert course.enrollmentRate == pytest.approx(25.0)


def test_department_age():
    department = vf.apply_virtual_fields(ResourceType.DEPARTMENT, {"establishmentYear": 1998}, today=TODAY)
    assert department.age == 27
    assert vf.apply_virtual_fields(ResourceType.DEPARTMENT, {}, today=TODAY).age == 0


def test_stale_virtual_fields_from_the_server_are_recomputed():
    record = {"className": "CS", "section": "B", "capacity": 10, "currentStrength": 2, "isFull": True, "classCode": "old"}
    school_class = vf.apply_virtual_fields(ResourceType.CLASS, record)
    assert school_class.isFull is False
    assert school_class.classCode == "CS-B"


def test_virtual_fields_never_reach_the_payload(sample_students):
    student = vf.apply_virtual_fields(ResourceType.STUDENT, sample_students[0], today=TODAY)
    payload = student.to_payload()
    assert "age" not in payload
    assert "fullAddress" not in payload
    assert payload["_id"] == "stu_1"

    stripped = vf.strip_virtual_fields(ResourceType.COURSE, {"courseName": "Algo", "isFull": False, "enrollmentRate": 5})
    assert stripped == {"courseName": "Algo"}
