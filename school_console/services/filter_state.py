# /school_console/services/filter_state.py

import logging
from typing import Any, Dict, Optional

from .. import config
from ..models.filter_model import FilterDescriptor

logger = logging.getLogger(__name__)

RESERVED_KEYS = ("page", "limit")


def is_empty(value: Any) -> bool:
    """Values that mean "no filter": None, "" and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


class FilterStateStore:
    """
    Holds the active filters and the pagination cursor for one resource list.

    Pure in-memory state. Every mutation drops the cached descriptor so the
    next `to_descriptor()` call rebuilds it.
    """

    def __init__(self, limit: int = config.DEFAULT_PAGE_SIZE):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self._filters: Dict[str, Any] = {}
        self._page = 1
        self._limit = limit
        self._cached: Optional[FilterDescriptor] = None

    # --- Accessors ---
    @property
    def page(self) -> int:
        return self._page

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def filters(self) -> Dict[str, Any]:
        return dict(self._filters)

    def get_filter(self, key: str, default: Any = None) -> Any:
        return self._filters.get(key, default)

    # --- Mutations ---
    def set_filter(self, key: str, value: Any) -> None:
        if key in RESERVED_KEYS:
            # The cursor keys never become filters.
            getattr(self, f"set_{key}")(int(value))
            return
        if is_empty(value):
            self._filters.pop(key, None)
        else:
            self._filters[key] = value.strip() if isinstance(value, str) else value
        self._invalidate()

    def set_page(self, page: int) -> None:
        if page < 1:
            raise ValueError(f"page must be at least 1, got {page}")
        self._page = page
        self._invalidate()

    def set_limit(self, limit: int) -> None:
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self._limit = limit
        self._invalidate()

    def reset(self) -> None:
        """Clears every filter and rewinds to page 1. The page size is kept."""
        self._filters.clear()
        self._page = 1
        self._invalidate()

    def to_descriptor(self) -> FilterDescriptor:
        if self._cached is None:
            self._cached = FilterDescriptor(page=self._page, limit=self._limit, filters=dict(self._filters))
            logger.debug("Rebuilt filter descriptor: %s", self._cached.query_string())
        return self._cached

    def _invalidate(self) -> None:
        self._cached = None
