from __future__ import annotations

import itertools
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from functools import lru_cache
from threading import RLock
from typing import Dict, List, Optional, Tuple

from .models import TodoEntity
from .settings import get_settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_todo_id() -> str:
    return uuid.uuid4().hex


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def create(self, title: str) -> TodoEntity:
        """Insert a new row with done=False and return it."""

    @abstractmethod
    def update(
        self, todo_id: str, *, done: Optional[bool] = None, title: Optional[str] = None
    ) -> Optional[TodoEntity]:
        """
        Apply the given fields to an existing row and refresh updated_at.
        Fields passed as None are left unchanged. Return None if not found.
        """

    @abstractmethod
    def delete(self, todo_id: str) -> bool:
        """Delete a row by id. Return True if deleted, False if not found."""

    @abstractmethod
    def delete_all(self) -> int:
        """Remove every row in one operation and return how many were removed."""

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """Return all rows, newest created_at first."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        # id -> (insertion sequence, entity); the sequence breaks created_at ties
        self._items: Dict[str, Tuple[int, TodoEntity]] = {}
        self._seq = itertools.count()

    def create(self, title: str) -> TodoEntity:
        now = utcnow()
        entity: TodoEntity = {
            "id": new_todo_id(),
            "title": title,
            "done": False,
            "created_at": now,
            "updated_at": now,
        }
        with self._lock:
            self._items[entity["id"]] = (next(self._seq), entity)
        return entity.copy()

    def update(
        self, todo_id: str, *, done: Optional[bool] = None, title: Optional[str] = None
    ) -> Optional[TodoEntity]:
        with self._lock:
            slot = self._items.get(todo_id)
            if slot is None:
                return None

            seq, existing = slot
            updated = existing.copy()
            if done is not None:
                updated["done"] = done
            if title is not None:
                updated["title"] = title
            updated["updated_at"] = max(utcnow(), existing["created_at"])

            self._items[todo_id] = (seq, updated)
            return updated.copy()

    def delete(self, todo_id: str) -> bool:
        with self._lock:
            return self._items.pop(todo_id, None) is not None

    def delete_all(self) -> int:
        with self._lock:
            count = len(self._items)
            self._items.clear()
            return count

    def list(self) -> List[TodoEntity]:
        with self._lock:
            slots = sorted(
                self._items.values(),
                key=lambda s: (s[1]["created_at"], s[0]),
                reverse=True,
            )
            # Return copies to avoid external mutation
            return [entity.copy() for _, entity in slots]


# PUBLIC_INTERFACE
@lru_cache(maxsize=None)
def get_repository() -> Repository:
    """
    Return the configured repository based on settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository

    The instance is cached so every request shares the same store; call
    get_repository.cache_clear() to rebuild it after changing settings.
    """
    settings = get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        return SQLiteRepository(settings.sqlite_db_path)
    return InMemoryRepository()
