# /school_console/errors.py

"""
The error taxonomy shared by every controller and form in the console.

Collaborators (fetch, persist, remove) may raise anything; `coerce_error`
folds those failures into one of the typed errors below so screens only ever
deal with a single user-facing message per failed operation.
"""

from typing import Dict, List, Optional
from fastapi import status


class ConsoleError(Exception):
    """Base class for every failure the console reports to a screen."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def user_message(self) -> str:
        return self.message


class ValidationError(ConsoleError):
    """A form failed local validation. Never leaves the form layer."""

    default_message = "Please correct the highlighted fields."

    def __init__(self, message: Optional[str] = None, invalid_paths: Optional[List[str]] = None):
        super().__init__(message)
        self.invalid_paths = list(invalid_paths or [])


class BadRequestError(ConsoleError):
    default_message = "Bad request. Please check your input."


class AuthError(ConsoleError):
    default_message = "Unauthorized. Please login again."


class NotFoundError(ConsoleError):
    default_message = "Resource not found."


class ConflictError(ConsoleError):
    default_message = "Conflict. The resource already exists."


class ServerError(ConsoleError):
    default_message = "Server error. Please try again later."


class NetworkUnreachableError(ConsoleError):
    default_message = (
        "Cannot connect to server. Please check your internet connection "
        "and ensure the backend is running."
    )


_FORBIDDEN_MESSAGE = "Forbidden. You do not have permission to perform this action."

_STATUS_MAP: Dict[int, type] = {
    status.HTTP_400_BAD_REQUEST: BadRequestError,
    status.HTTP_401_UNAUTHORIZED: AuthError,
    status.HTTP_403_FORBIDDEN: AuthError,
    status.HTTP_404_NOT_FOUND: NotFoundError,
    status.HTTP_409_CONFLICT: ConflictError,
}


def error_from_status(status_code: int, detail: Optional[str] = None) -> ConsoleError:
    """
    Maps an HTTP status reported by the backend onto the error taxonomy.

    Status 0 is what a client sees when the request never reached the server.
    A server-provided `detail` is only surfaced for 400 responses, where it
    describes what was wrong with the submitted input.
    """
    if status_code == 0:
        return NetworkUnreachableError(status_code=0)
    if status_code == status.HTTP_403_FORBIDDEN:
        return AuthError(_FORBIDDEN_MESSAGE, status_code=status_code)
    error_cls = _STATUS_MAP.get(status_code)
    if error_cls is BadRequestError:
        return BadRequestError(detail, status_code=status_code)
    if error_cls is not None:
        return error_cls(status_code=status_code)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return ServerError(status_code=status_code)
    return ServerError(f"Error {status_code}: {detail or 'Unexpected response.'}", status_code=status_code)


def coerce_error(exc: BaseException) -> ConsoleError:
    """Folds any collaborator exception into the taxonomy."""
    if isinstance(exc, ConsoleError):
        return exc
    # TimeoutError and ConnectionError are both OSError subclasses.
    if isinstance(exc, OSError):
        return NetworkUnreachableError()
    return ServerError()
