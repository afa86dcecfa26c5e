# /tests/test_errors.py

import pytest

from school_console.errors import (
    AuthError, BadRequestError, ConflictError, ConsoleError, NetworkUnreachableError,
    NotFoundError, ServerError, coerce_error, error_from_status,
)


@pytest.mark.parametrize("status_code, expected_cls, message", [
    (0, NetworkUnreachableError, "Cannot connect to server. Please check your internet connection and ensure the backend is running."),
    (401, AuthError, "Unauthorized. Please login again."),
    (403, AuthError, "Forbidden. You do not have permission to perform this action."),
    (404, NotFoundError, "Resource not found."),
    (409, ConflictError, "Conflict. The resource already exists."),
    (500, ServerError, "Server error. Please try again later."),
    (503, ServerError, "Server error. Please try again later."),
])
def test_status_mapping(status_code, expected_cls, message):
    error = error_from_status(status_code)
    assert isinstance(error, expected_cls)
    assert error.user_message == message


def test_bad_request_surfaces_server_detail():
    assert error_from_status(400, "Roll number already taken").user_message == "Roll number already taken"
    assert error_from_status(400).user_message == "Bad request. Please check your input."


def test_unmapped_status_keeps_its_code():
    error = error_from_status(418, "teapot")
    assert isinstance(error, ServerError)
    assert error.status_code == 418
    assert error.user_message == "Error 418: teapot"


def test_coerce_error():
    conflict = ConflictError()
    assert coerce_error(conflict) is conflict
    assert isinstance(coerce_error(ConnectionRefusedError()), NetworkUnreachableError)
    assert isinstance(coerce_error(KeyError("x")), ServerError)
    assert coerce_error(ValueError()).kind == "ServerError"
    assert isinstance(error_from_status(404), ConsoleError)
