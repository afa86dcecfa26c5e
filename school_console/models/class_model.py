# /school_console/models/class_model.py

# --- Core Imports ---
from typing import Any, ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .entity_model import EntityRecord

# --- Nested Models ---

class TimeSlot(BaseModel):
    start: Optional[str] = None
    end: Optional[str] = None


class Schedule(BaseModel):
    model_config = ConfigDict(extra="allow")

    days: List[str] = Field(default_factory=list)
    time: Optional[TimeSlot] = None
    roomNumber: Optional[str] = None


class ClassTeacher(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

# --- Model Definition ---

class SchoolClass(EntityRecord):
    """A class (section of students) as returned by the classes endpoints."""

    VIRTUAL_FIELDS: ClassVar[FrozenSet[str]] = frozenset(
        {"classCode", "availableSeats", "isFull", "utilization", "seatStatus"}
    )

    className: Optional[str] = None
    section: Optional[str] = None
    academicYear: Optional[str] = None
    capacity: int = 0
    currentStrength: int = 0
    department: Optional[Any] = None
    classTeacher: Optional[ClassTeacher] = None
    schedule: Optional[Schedule] = None
    description: Optional[str] = None

    # --- Virtual fields (computed client-side only) ---
    classCode: Optional[str] = None
    availableSeats: Optional[int] = None
    isFull: Optional[bool] = None
    utilization: Optional[float] = None
    seatStatus: Optional[str] = None
