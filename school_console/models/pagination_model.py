# /school_console/models/pagination_model.py

# --- Core Imports ---
from typing import Any, Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# --- Model Definitions ---

class PaginationState(BaseModel):
    """
    The pagination block a list screen renders.

    `currentPage` is always inside `[1, max(totalPages, 1)]`.
    """
    currentPage: int = Field(default=1, ge=1)
    itemsPerPage: int = Field(default=10, ge=0)
    totalItems: int = Field(default=0, ge=0)
    totalPages: int = Field(default=0, ge=0)
    hasNextPage: bool = False
    hasPrevPage: bool = False


class ServerPagination(BaseModel):
    """The pagination block echoed back by every list endpoint."""
    model_config = ConfigDict(extra="ignore")

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    totalPages: int = Field(..., ge=0)
    hasNextPage: bool = False
    hasPrevPage: bool = False


class ListPage(BaseModel):
    """
    One page of a list endpoint's response.

    Accepts both the neutral field names (`items`, `totalCount`, `pageInfo`)
    and the backend's own wire names (`data`, `total`, `pagination`).
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    items: List[Dict[str, Any]] = Field(
        default_factory=list, validation_alias=AliasChoices("items", "data")
    )
    totalCount: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("totalCount", "total")
    )
    pageInfo: ServerPagination = Field(
        ..., validation_alias=AliasChoices("pageInfo", "pagination")
    )
