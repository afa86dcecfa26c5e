# /school_console/services/collaborators.py

"""
The external capabilities the console core depends on.

The core never talks to HTTP, the DOM or a dialog toolkit directly; each
screen injects these callables instead, which keeps every controller testable
without a UI host or a running backend.
"""

import inspect
from enum import Enum
from typing import Any, Awaitable, Dict, Optional, Protocol, Union


class NotifyKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class FetchPage(Protocol):
    """`(page, limit, filters) -> {items|data, totalCount|total, pageInfo|pagination}`"""

    def __call__(self, page: int, limit: int, filters: Dict[str, Any]) -> Awaitable[Dict[str, Any]]: ...


class FetchStats(Protocol):
    def __call__(self) -> Awaitable[Dict[str, Any]]: ...


class Persist(Protocol):
    """Creates (`record_id is None`) or updates a record and returns the saved entity."""

    def __call__(self, record_id: Optional[str], payload: Dict[str, Any]) -> Awaitable[Dict[str, Any]]: ...


class Remove(Protocol):
    def __call__(self, record_id: str) -> Awaitable[Any]: ...


class Confirm(Protocol):
    """A yes/no decision point. May answer synchronously or asynchronously."""

    def __call__(self, message: str) -> Union[bool, Awaitable[bool]]: ...


class Notify(Protocol):
    def __call__(self, message: str, kind: NotifyKind) -> Any: ...


async def resolve(value: Any) -> Any:
    """Awaits `value` when a collaborator handed back an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value
