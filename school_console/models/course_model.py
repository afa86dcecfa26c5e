# /school_console/models/course_model.py

# --- Core Imports ---
from typing import Any, ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .class_model import TimeSlot
from .entity_model import EntityRecord

# --- Nested Models ---

class Instructor(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class CourseSchedule(BaseModel):
    model_config = ConfigDict(extra="allow")

    days: List[str] = Field(default_factory=list)
    time: Optional[TimeSlot] = None
    room: Optional[str] = None


class CourseResource(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    uploadedAt: Optional[Any] = None

# --- Model Definition ---

class Course(EntityRecord):
    VIRTUAL_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"availableSeats", "isFull", "enrollmentRate"})

    courseName: Optional[str] = None
    courseCode: Optional[str] = None
    creditHours: Optional[int] = None
    description: Optional[str] = None
    department: Optional[Any] = None
    instructor: Optional[Instructor] = None
    prerequisites: List[Any] = Field(default_factory=list)
    semester: Optional[str] = None
    year: Optional[int] = None
    schedule: Optional[CourseSchedule] = None
    maxStudents: int = 0
    enrolledStudents: int = 0
    courseType: Optional[str] = None
    gradingPolicy: Optional[Any] = None
    resources: List[CourseResource] = Field(default_factory=list)

    # --- Virtual fields (computed client-side only) ---
    availableSeats: Optional[int] = None
    isFull: Optional[bool] = None
    enrollmentRate: Optional[float] = None
