from __future__ import annotations


class TodoError(Exception):
    """Base class for all todo errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# PUBLIC_INTERFACE
class TodoValidationError(TodoError):
    """A required field is missing or empty. Reported as HTTP 400."""

    status_code = 400


# PUBLIC_INTERFACE
class StoreError(TodoError):
    """The record store failed (connectivity, constraint, missing row)."""


# PUBLIC_INTERFACE
class TodoNotFoundError(StoreError):
    """No row matches the requested id."""

    def __init__(self, todo_id: str) -> None:
        super().__init__(f"Todo {todo_id!r} not found")
        self.todo_id = todo_id


# PUBLIC_INTERFACE
class OperationFailedError(TodoError):
    """
    Raised by the service when a store error aborted an operation.

    The message is the generic text sent to clients; the underlying cause is
    chained and logged server-side.
    """
