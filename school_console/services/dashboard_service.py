# /school_console/services/dashboard_service.py

# --- Core Imports ---
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .. import config
# Import the Pydantic model to ensure our output matches the data contract.
from ..models.dashboard_model import DashboardViewModel
from ..models.pagination_model import ListPage
from ..models.resource_model import ResourceType
from .collaborators import FetchPage, FetchStats
from .virtual_fields import apply_virtual_fields

logger = logging.getLogger(__name__)


@dataclass
class DashboardSources:
    """The six independent queries the dashboard is assembled from."""
    student_stats: FetchStats
    class_stats: FetchStats
    department_stats: FetchStats
    course_stats: FetchStats
    students: FetchPage
    classes: FetchPage


# Each stats source maps onto view-model fields through its `overview` block.
_STAT_FIELDS = {
    "student_stats": {"totalStudents": "totalStudents", "activeStudents": "activeStudents"},
    "class_stats": {"totalClasses": "totalClasses", "activeClasses": "activeClasses"},
    "department_stats": {"totalDepartments": "totalDepartments"},
    "course_stats": {"totalCourses": "totalCourses"},
}


def _overview_counts(payload: Any, mapping: Dict[str, str]) -> Dict[str, int]:
    overview = (payload or {}).get("overview") or {}
    counts = {}
    for target, source_key in mapping.items():
        value = overview.get(source_key) or 0
        counts[target] = max(int(value), 0)
    return counts


async def _invoke(source, *args: Any) -> Any:
    # Keeps a source that raises before returning an awaitable inside its own branch.
    return await source(*args)


def _recent(resource: ResourceType, payload: Any, limit: int) -> List[Any]:
    page = ListPage.model_validate(payload)
    return [apply_virtual_fields(resource, item) for item in page.items[:limit]]


class DashboardAggregator:
    """
    Fan-out/fan-in of the dashboard's statistics and recent-items queries.

    All sources run concurrently and the combined view model is published
    only once every one of them has settled. A failing source never blocks
    the others: its fields keep their zero/empty defaults and its name is
    recorded in `failedSources`.
    """

    def __init__(self, recent_limit: int = config.DASHBOARD_RECENT_LIMIT):
        self.recent_limit = recent_limit
        self.loading = False
        self.view_model: Optional[DashboardViewModel] = None

    async def load(self, sources: DashboardSources) -> DashboardViewModel:
        self.loading = True
        limit = self.recent_limit

        # 1. FAN OUT: every query is issued before any is awaited.
        names = list(_STAT_FIELDS) + ["students", "classes"]
        calls = [_invoke(getattr(sources, name)) for name in _STAT_FIELDS]
        calls += [_invoke(sources.students, 1, limit, {}), _invoke(sources.classes, 1, limit, {})]
        results = await asyncio.gather(*calls, return_exceptions=True)

        # 2. FAN IN: each branch is converted, or defaulted, on its own.
        fields: Dict[str, Any] = {}
        failed: List[str] = []
        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                logger.warning("Dashboard source %r failed; using defaults: %r", name, result)
                failed.append(name)
                continue
            try:
                if name in _STAT_FIELDS:
                    fields.update(_overview_counts(result, _STAT_FIELDS[name]))
                elif name == "students":
                    fields["recentStudents"] = _recent(ResourceType.STUDENT, result, limit)
                else:
                    fields["recentClasses"] = _recent(ResourceType.CLASS, result, limit)
            except Exception as e:
                logger.warning("Dashboard source %r failed; using defaults: %s", name, e)
                failed.append(name)

        # 3. PUBLISH: one consolidated, contract-validated view model.
        self.view_model = DashboardViewModel(**fields, failedSources=failed)
        self.loading = False
        return self.view_model
