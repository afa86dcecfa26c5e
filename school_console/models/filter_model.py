# /school_console/models/filter_model.py

# --- Core Imports ---
from collections import OrderedDict
from typing import Dict, Union
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

FilterValue = Union[str, int, float, bool]

# --- Model Definition ---

class FilterDescriptor(BaseModel):
    """
    The canonical set of query parameters for one list request: the active
    filters plus the pagination cursor.

    Two descriptors holding the same filters compare equal regardless of the
    order the filters were set in, and always serialize to the same query
    string, which makes them safe to use as cache keys.
    """
    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1, description="1-based page number.")
    limit: int = Field(default=10, ge=1, description="Items per page.")
    filters: Dict[str, FilterValue] = Field(default_factory=dict)

    def as_params(self) -> "OrderedDict[str, FilterValue]":
        """`page` and `limit` first, then filter keys in lexicographic order."""
        params: "OrderedDict[str, FilterValue]" = OrderedDict()
        params["page"] = self.page
        params["limit"] = self.limit
        for key in sorted(self.filters):
            params[key] = self.filters[key]
        return params

    def query_string(self) -> str:
        return urlencode([(key, _stringify(value)) for key, value in self.as_params().items()])

    def __hash__(self) -> int:
        return hash(self.query_string())


def _stringify(value: FilterValue) -> str:
    # Matches the lower-case booleans a JavaScript backend expects.
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
