"""Error Hierarchy — tests for codes, statuses and the REST envelope.

Tests cover:
    - each error class carries its code, category and HTTP status
    - ResourceNotFoundError formats its message from type and id
    - to_response() never includes debug_info
"""

import pytest

from todolist.core.errors import (
    AuthenticationError,
    ConcurrencyError,
    DatabaseError,
    DomainError,
    ErrorCategory,
    ErrorContext,
    InvalidOperationError,
    ResourceNotFoundError,
    TodoListError,
    ValidationFailedError,
)


@pytest.mark.parametrize("error, code, status", [
    (ValidationFailedError("bad"), "VALIDATION_ERROR", 400),
    (InvalidOperationError("nope"), "INVALID_OPERATION", 409),
    (DomainError("broken"), "DOMAIN_ERROR", 400),
    (ResourceNotFoundError("Task", "1"), "RESOURCE_NOT_FOUND", 404),
    (AuthenticationError("who"), "UNAUTHENTICATED", 401),
    (DatabaseError("down", "query"), "DATABASE_ERROR", 503),
    (ConcurrencyError("race"), "CONCURRENCY_CONFLICT", 409),
])
def test_error_code_and_status(error, code, status):
    assert isinstance(error, TodoListError)
    assert error.code == code
    assert error.http_status == status


def test_not_found_message():
    error = ResourceNotFoundError("TaskList", "abc")
    assert error.message == "TaskList 'abc' not found"
    assert error.category is ErrorCategory.RESOURCE_NOT_FOUND


def test_response_envelope_hides_debug_info():
    error = InvalidOperationError(
        "You don't have access to this task.",
        ErrorContext(user_id="u1", debug_info={"sql": "SELECT"}),
    )
    body = error.to_response()
    assert body["error"]["code"] == "INVALID_OPERATION"
    assert body["error"]["message"] == "You don't have access to this task."
    assert "sql" not in str(body)
