from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from .errors import OperationFailedError, StoreError, TodoNotFoundError, TodoValidationError
from .models import TodoEntity
from .repositories import Repository

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Title is required"
ID_REQUIRED = "ID is required"
DELETE_ID_REQUIRED = "ID is required for single delete, or use ?all=true to delete all"


def _clean_title(value: Any) -> Optional[str]:
    """Return the trimmed title, or None when it is not a non-blank string."""
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


@contextmanager
def _store_operation(failure_message: str) -> Iterator[None]:
    try:
        yield
    except StoreError as exc:
        logger.exception("%s: %s", failure_message, exc.message)
        raise OperationFailedError(failure_message) from exc


# PUBLIC_INTERFACE
class TodoService:
    """
    Validates requests and turns them into repository calls.

    Holds no state of its own; every method is a single store operation.
    Validation failures raise TodoValidationError before the store is
    touched. Store failures, including unknown ids, raise
    OperationFailedError carrying the generic client-facing message.
    """

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    def list_todos(self) -> List[TodoEntity]:
        with _store_operation("Failed to fetch todos"):
            return self._repo.list()

    def create_todo(self, title: Any) -> TodoEntity:
        clean = _clean_title(title)
        if clean is None:
            raise TodoValidationError(TITLE_REQUIRED)
        with _store_operation("Failed to create todo"):
            created = self._repo.create(clean)
        logger.info("Created todo %s", created["id"])
        return created

    def update_todo(self, todo_id: Optional[str], done: Any = None, title: Any = None) -> TodoEntity:
        """
        Update done and/or title of an existing todo.

        done is applied whenever it is a bool (False included); title only when
        it is a non-blank string. Anything else is ignored rather than
        rejected, so a request carrying neither still refreshes updated_at.
        """
        if not todo_id:
            raise TodoValidationError(ID_REQUIRED)
        new_done = done if isinstance(done, bool) else None
        new_title = _clean_title(title)
        with _store_operation("Failed to update todo"):
            updated = self._repo.update(todo_id, done=new_done, title=new_title)
            if updated is None:
                raise TodoNotFoundError(todo_id)
        logger.info("Updated todo %s", todo_id)
        return updated

    def delete_todo(self, todo_id: Optional[str]) -> None:
        if not todo_id:
            raise TodoValidationError(DELETE_ID_REQUIRED)
        with _store_operation("Failed to delete todo(s)"):
            if not self._repo.delete(todo_id):
                raise TodoNotFoundError(todo_id)
        logger.info("Deleted todo %s", todo_id)

    def delete_all_todos(self) -> int:
        with _store_operation("Failed to delete todo(s)"):
            count = self._repo.delete_all()
        logger.info("Deleted all todos (%d rows)", count)
        return count
