# /school_console/models/dashboard_model.py

# --- Core Imports ---
# Import the necessary components from Pydantic for data modeling.
from typing import List

from pydantic import BaseModel, Field

from .class_model import SchoolClass
from .student_model import Student

# --- Model Definition ---

class DashboardViewModel(BaseModel):
    """
    Defines the data contract for the consolidated dashboard view.

    Every field is independently defaulted: a count whose source query failed
    is 0 and a recent-items list whose source failed is empty, so the
    dashboard always renders whatever did load.
    """

    totalStudents: int = Field(default=0, ge=0, description="Total number of students.", examples=[1200])
    activeStudents: int = Field(default=0, ge=0, description="Students with status 'Active'.", examples=[1130])
    totalClasses: int = Field(default=0, ge=0, examples=[40])
    activeClasses: int = Field(default=0, ge=0, examples=[36])
    totalDepartments: int = Field(default=0, ge=0, examples=[6])
    totalCourses: int = Field(default=0, ge=0, examples=[85])

    recentStudents: List[Student] = Field(
        default_factory=list,
        description="The most recently created students, bounded by the dashboard limit.",
    )
    recentClasses: List[SchoolClass] = Field(default_factory=list)

    failedSources: List[str] = Field(
        default_factory=list,
        description="Names of the sources that failed and were defaulted.",
    )
