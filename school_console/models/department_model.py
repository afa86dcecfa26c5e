# /school_console/models/department_model.py

# --- Core Imports ---
from typing import ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .entity_model import EntityRecord

# --- Nested Models ---

class HeadOfDepartment(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    qualification: Optional[str] = None


class Location(BaseModel):
    building: Optional[str] = None
    floor: Optional[str] = None
    room: Optional[str] = None

# --- Model Definition ---

class Department(EntityRecord):
    VIRTUAL_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"age"})

    departmentName: Optional[str] = None
    departmentCode: Optional[str] = None
    headOfDepartment: Optional[HeadOfDepartment] = None
    contactEmail: Optional[str] = None
    contactPhone: Optional[str] = None
    establishmentYear: Optional[int] = None
    description: Optional[str] = None
    totalFaculty: int = 0
    totalStudents: int = 0
    location: Optional[Location] = None
    facilities: List[str] = Field(default_factory=list)

    # --- Virtual fields (computed client-side only) ---
    age: Optional[int] = None
