# /school_console/models/student_model.py

# --- Core Imports ---
from typing import Any, ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .entity_model import EntityRecord

# --- Nested Models ---

class Address(BaseModel):
    model_config = ConfigDict(extra="allow")

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipCode: Optional[str] = None
    country: Optional[str] = None


class GuardianInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    relationship: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

# --- Model Definition ---

class Student(EntityRecord):
    """A student record as returned by the students endpoints."""

    VIRTUAL_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"age", "fullAddress"})

    name: Optional[str] = None
    rollNumber: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None
    dateOfBirth: Optional[Any] = None
    gender: Optional[str] = None
    # `class` is a reserved word; the wire name is kept through the alias.
    class_: Optional[Any] = Field(default=None, alias="class")
    department: Optional[Any] = None
    courses: List[Any] = Field(default_factory=list)
    enrollmentDate: Optional[Any] = None
    academicYear: Optional[str] = None
    guardianInfo: Optional[GuardianInfo] = None

    # --- Virtual fields (computed client-side only) ---
    age: Optional[int] = None
    fullAddress: Optional[str] = None
