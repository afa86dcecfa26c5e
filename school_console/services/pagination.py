# /school_console/services/pagination.py

"""
Pagination arithmetic for list screens.

List data is always paged by the server; the calculator only derives what the
UI needs around it: clamped navigation targets, the window of page buttons,
and the "Showing X-Y of Z" range.
"""

import math
from typing import List, Optional, Tuple

from .. import config
from ..models.pagination_model import PaginationState, ServerPagination


class PaginationCalculator:

    @staticmethod
    def total_pages(total_items: int, per_page: int) -> int:
        if per_page <= 0:
            return 0
        return math.ceil(max(total_items, 0) / per_page)

    @staticmethod
    def clamp_page(page: int, total_pages: int) -> int:
        return min(max(page, 1), max(total_pages, 1))

    @classmethod
    def compute(cls, current: int, total: int, per_page: int) -> PaginationState:
        total_pages = cls.total_pages(total, per_page)
        current_page = cls.clamp_page(current, total_pages)
        return PaginationState(
            currentPage=current_page,
            itemsPerPage=max(per_page, 0),
            totalItems=max(total, 0),
            totalPages=total_pages,
            hasNextPage=current_page < total_pages,
            hasPrevPage=current_page > 1,
        )

    @classmethod
    def from_server(cls, page_info: ServerPagination, total_items: int) -> PaginationState:
        """
        Adopts the server's pagination block as-is. Only `currentPage` is
        clamped, so the published state never points outside the page range.
        """
        return PaginationState(
            currentPage=cls.clamp_page(page_info.page, page_info.totalPages),
            itemsPerPage=page_info.limit,
            totalItems=max(total_items, 0),
            totalPages=page_info.totalPages,
            hasNextPage=page_info.hasNextPage,
            hasPrevPage=page_info.hasPrevPage,
        )

    @staticmethod
    def windowed_page_numbers(state: PaginationState, window_size: Optional[int] = None) -> List[int]:
        """
        Page numbers to render as buttons, centred on the current page.

        The first button is `currentPage - floor(window_size / 2)`, clamped to 1;
        the window is clipped at the last page rather than shifted, so it
        narrows as the current page approaches the end.
        """
        window_size = config.PAGE_WINDOW_SIZE if window_size is None else window_size
        if window_size < 1:
            raise ValueError("window_size must be at least 1")
        total = state.totalPages
        if total <= 0:
            return []
        if total <= window_size:
            return list(range(1, total + 1))
        current = min(max(state.currentPage, 1), total)
        start = max(1, current - window_size // 2)
        end = min(total, start + window_size - 1)
        return list(range(start, end + 1))

    @staticmethod
    def item_range(state: PaginationState) -> Tuple[int, int]:
        if state.totalItems == 0 or state.itemsPerPage == 0:
            return (0, 0)
        first = (state.currentPage - 1) * state.itemsPerPage + 1
        if first > state.totalItems:
            return (0, 0)
        last = min(state.currentPage * state.itemsPerPage, state.totalItems)
        return (first, last)
