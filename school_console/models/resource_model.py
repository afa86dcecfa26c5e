# /school_console/models/resource_model.py

# --- Core Imports ---
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .pagination_model import PaginationState
from ..errors import ConsoleError


class ResourceType(str, Enum):
    STUDENT = "students"
    CLASS = "classes"
    DEPARTMENT = "departments"
    COURSE = "courses"

    @property
    def label(self) -> str:
        return {
            ResourceType.STUDENT: "Student",
            ResourceType.CLASS: "Class",
            ResourceType.DEPARTMENT: "Department",
            ResourceType.COURSE: "Course",
        }[self]


class ListViewState(BaseModel):
    """Everything a list screen needs to render, published after each load."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    items: List[Any] = Field(default_factory=list)
    pagination: PaginationState = Field(default_factory=PaginationState)
    loading: bool = False
    error: Optional[str] = None
    errorKind: Optional[str] = None


@dataclass
class OperationResult:
    """
    Outcome of a controller or form operation.

    `stale` marks a load whose response was discarded because a newer request
    had been issued (or the controller was disposed) by the time it arrived.
    """
    ok: bool
    error: Optional[ConsoleError] = None
    cancelled: bool = False
    stale: bool = False
    value: Any = None
