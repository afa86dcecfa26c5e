# /school_console/services/resource_list_controller.py

"""
The generic list-screen controller shared by students, classes, departments
and courses.

It owns one FilterStateStore, calls the injected `fetch` collaborator with the
store's descriptor, runs every returned record through the virtual-field
computer, and publishes a ListViewState. Loads are tagged with a sequence
token so that only the most recently *issued* request can ever reach the
visible state, no matter in which order responses complete.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

import pydantic

from .. import config
from ..errors import ConsoleError, ServerError, coerce_error
from ..models.pagination_model import ListPage, PaginationState
from ..models.resource_model import ListViewState, OperationResult, ResourceType
from . import export_service
from .collaborators import Confirm, FetchPage, Notify, NotifyKind, Remove, resolve
from .filter_state import FilterStateStore
from .pagination import PaginationCalculator
from .virtual_fields import apply_virtual_fields

logger = logging.getLogger(__name__)

Listener = Callable[[ListViewState], Any]

# Query key each list endpoint matches free-text search against.
SEARCH_KEYS = {ResourceType.STUDENT: "name"}


class ResourceListController:
    def __init__(
        self,
        resource: ResourceType,
        fetch: FetchPage,
        remove: Optional[Remove] = None,
        confirm: Optional[Confirm] = None,
        notify: Optional[Notify] = None,
        limit: int = config.DEFAULT_PAGE_SIZE,
        search_key: Optional[str] = None,
    ):
        self.resource = resource
        self.store = FilterStateStore(limit=limit)
        self.search_key = search_key or SEARCH_KEYS.get(resource, "search")
        self._fetch = fetch
        self._remove = remove
        self._confirm = confirm
        self._notify = notify
        self._request_seq = 0
        self._disposed = False
        self._shown_filters: Dict[str, Any] = {}
        self._listeners: List[Listener] = []
        self.state = ListViewState(pagination=PaginationCalculator.compute(1, 0, limit))

    # --- Read-only conveniences for screens ---
    @property
    def items(self) -> List[Any]:
        return self.state.items

    @property
    def pagination(self) -> PaginationState:
        return self.state.pagination

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def disposed(self) -> bool:
        return self._disposed

    def page_numbers(self, window_size: Optional[int] = None) -> List[int]:
        return PaginationCalculator.windowed_page_numbers(self.state.pagination, window_size)

    # --- Subscription ---
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispose(self) -> None:
        """Detaches the controller from its screen. Later responses become no-ops."""
        self._disposed = True
        self._listeners.clear()

    # --- Loading ---
    async def load(self, filters: Optional[Dict[str, Any]] = None) -> OperationResult:
        if self._disposed:
            return OperationResult(ok=False, stale=True)
        filters = dict(filters or {})
        page = filters.pop("page", None)
        for key, value in filters.items():
            self.store.set_filter(key, value)
        if filters:
            self.store.set_page(1)
        if page is not None:
            self.store.set_page(int(page))
        return await self._load_current()

    async def refresh(self) -> OperationResult:
        return await self.load()

    async def search(self, term: Optional[str]) -> OperationResult:
        return await self.set_filter(self.search_key, term)

    async def set_filter(self, key: str, value: Any) -> OperationResult:
        """Any filter change rewinds to page 1 before reloading."""
        self.store.set_filter(key, value)
        self.store.set_page(1)
        return await self.load()

    async def set_sort(self, sort_by: str, sort_order: str = "asc") -> OperationResult:
        if sort_order not in ("asc", "desc"):
            raise ValueError(f"sort_order must be 'asc' or 'desc', got {sort_order!r}")
        self.store.set_filter("sortBy", sort_by)
        self.store.set_filter("sortOrder", sort_order)
        self.store.set_page(1)
        return await self.load()

    async def change_page(self, page: int) -> OperationResult:
        if page < 1 or page > self.state.pagination.totalPages:
            logger.debug("Ignoring out-of-range page %s for %s.", page, self.resource.value)
            return OperationResult(ok=False)
        self.store.set_page(page)
        return await self.load()

    async def change_page_size(self, limit: int) -> OperationResult:
        if limit not in config.PAGE_SIZES:
            raise ValueError(f"Page size must be one of {config.PAGE_SIZES}, got {limit}")
        self.store.set_limit(limit)
        self.store.set_page(1)
        return await self.load()

    async def clear_filters(self) -> OperationResult:
        self.store.reset()
        return await self.load()

    async def _load_current(self, reconcile: bool = True) -> OperationResult:
        self._request_seq += 1
        token = self._request_seq
        descriptor = self.store.to_descriptor()
        self._publish(loading=True)

        page: Optional[ListPage] = None
        records: List[Any] = []
        error: Optional[ConsoleError] = None
        try:
            raw = await self._fetch(descriptor.page, descriptor.limit, dict(descriptor.filters))
            page = ListPage.model_validate(raw)
            records = [apply_virtual_fields(self.resource, item) for item in page.items]
        except asyncio.CancelledError:
            if self._is_current(token):
                self._restore_cursor()
                self._publish(loading=False)
            raise
        except pydantic.ValidationError as e:
            logger.warning("Malformed %s list response: %s", self.resource.value, e)
            error = ServerError("The server returned an unexpected response.")
        except Exception as e:
            error = coerce_error(e)

        if not self._is_current(token):
            logger.info(
                "Discarding stale %s response (request %s, latest %s).",
                self.resource.value, token, self._request_seq,
            )
            return OperationResult(ok=False, stale=True, error=error)

        if error is not None:
            logger.warning("Loading %s failed: %s", self.resource.value, error.message)
            self._restore_cursor()
            self._publish(loading=False, error=error.user_message, errorKind=error.kind)
            return OperationResult(ok=False, error=error)

        info = page.pageInfo
        if reconcile and info.page > info.totalPages >= 1:
            # The requested page no longer exists (e.g. after a delete); go to the last one.
            self.store.set_page(info.totalPages)
            return await self._load_current(reconcile=False)

        pagination = PaginationCalculator.from_server(info, page.totalCount)
        if pagination.currentPage != self.store.page:
            self.store.set_page(pagination.currentPage)
        self._shown_filters = dict(descriptor.filters)
        self._publish(items=records, pagination=pagination, loading=False, error=None, errorKind=None)
        logger.info(
            "Loaded %s %s (page %s of %s).",
            len(records), self.resource.value, pagination.currentPage, pagination.totalPages,
        )
        return OperationResult(ok=True, value=records)

    # --- Deletion ---
    async def delete(self, record_id: str, label: Optional[str] = None) -> OperationResult:
        if self._remove is None or self._confirm is None:
            raise RuntimeError(f"Deleting {self.resource.value} requires remove and confirm collaborators.")
        noun = label or f"this {self.resource.label.lower()}"
        confirmed = await resolve(self._confirm(f"Are you sure you want to delete {noun}?"))
        if not confirmed:
            return OperationResult(ok=False, cancelled=True)

        try:
            await self._remove(record_id)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            error = coerce_error(e)
            logger.warning("Deleting %s %s failed: %s", self.resource.label, record_id, error.message)
            if not self._disposed:
                self._publish(error=error.user_message, errorKind=error.kind)
            await self._send(error.user_message, NotifyKind.ERROR)
            return OperationResult(ok=False, error=error)

        logger.info("Deleted %s %s.", self.resource.label, record_id)
        await self._send(f"{self.resource.label} deleted successfully", NotifyKind.SUCCESS)
        reload_result = await self.load()
        return OperationResult(ok=True, value=reload_result)

    # --- Export ---
    def export_csv(self, columns: Optional[Sequence[str]] = None) -> str:
        return export_service.records_to_csv(self.state.items, columns=columns)

    # --- Internals ---
    def _is_current(self, token: int) -> bool:
        return token == self._request_seq and not self._disposed

    def _restore_cursor(self) -> None:
        """
        Points the store back at the page on screen after a failed load, so a
        later refresh or delete reloads what the user is looking at. A failed
        filter change keeps its filters and stays on page 1.
        """
        if self.store.filters != self._shown_filters:
            return
        shown = self.state.pagination
        if shown.itemsPerPage >= 1 and self.store.limit != shown.itemsPerPage:
            self.store.set_limit(shown.itemsPerPage)
        if self.store.page != shown.currentPage:
            self.store.set_page(shown.currentPage)

    def _publish(self, **changes: Any) -> None:
        self.state = self.state.model_copy(update=changes)
        for listener in list(self._listeners):
            listener(self.state)

    async def _send(self, message: str, kind: NotifyKind) -> None:
        if self._notify is not None and not self._disposed:
            await resolve(self._notify(message, kind))
