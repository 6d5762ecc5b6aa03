from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Generator, List, Optional

from .errors import StoreError
from .models import TodoEntity
from .repositories import Repository, new_todo_id, utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"
    done: str = "done"
    created_at: str = "created_at"
    updated_at: str = "updated_at"


_COLS = _Cols()


def _fmt_dt(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


class SQLiteRepository(Repository):
    """
    SQLite-backed repository. One connection per operation, committed on
    success and rolled back on any sqlite3 error, which is re-raised as
    StoreError.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            conn = sqlite3.connect(self._db_path)
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open database {self._db_path!r}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} TEXT PRIMARY KEY,
                    {_COLS.title} TEXT NOT NULL CHECK (length(trim({_COLS.title})) > 0),
                    {_COLS.done} INTEGER NOT NULL DEFAULT 0,
                    {_COLS.created_at} TEXT NOT NULL,
                    {_COLS.updated_at} TEXT NOT NULL
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_created_at ON {_COLS.table}({_COLS.created_at})"
            )
        logger.debug("SQLite store ready at %s", self._db_path)

    def _row_to_entity(self, row: sqlite3.Row) -> TodoEntity:
        return {
            "id": str(row[_COLS.id]),
            "title": str(row[_COLS.title]),
            "done": bool(row[_COLS.done]),
            "created_at": datetime.fromisoformat(row[_COLS.created_at]),
            "updated_at": datetime.fromisoformat(row[_COLS.updated_at]),
        }

    def _select(self, conn: sqlite3.Connection, todo_id: str) -> Optional[sqlite3.Row]:
        return conn.execute(f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)).fetchone()

    def _fetch_written(self, conn: sqlite3.Connection, todo_id: str) -> TodoEntity:
        row = self._select(conn, todo_id)
        if row is None:
            raise StoreError(f"Todo {todo_id!r} missing right after write")
        return self._row_to_entity(row)

    def create(self, title: str) -> TodoEntity:
        now = _fmt_dt(utcnow())
        new_id = new_todo_id()
        with self._conn() as conn:
            conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.title}, {_COLS.done},
                    {_COLS.created_at}, {_COLS.updated_at})
                VALUES (?, ?, 0, ?, ?)
                """,
                (new_id, title, now, now),
            )
            return self._fetch_written(conn, new_id)

    def update(
        self, todo_id: str, *, done: Optional[bool] = None, title: Optional[str] = None
    ) -> Optional[TodoEntity]:
        assignments = [f"{_COLS.updated_at} = max(?, {_COLS.created_at})"]
        params: list = [_fmt_dt(utcnow())]
        if done is not None:
            assignments.append(f"{_COLS.done} = ?")
            params.append(1 if done else 0)
        if title is not None:
            assignments.append(f"{_COLS.title} = ?")
            params.append(title)

        with self._conn() as conn:
            cur = conn.execute(
                f"UPDATE {_COLS.table} SET {', '.join(assignments)} WHERE {_COLS.id} = ?",
                [*params, todo_id],
            )
            if cur.rowcount == 0:
                return None
            return self._fetch_written(conn, todo_id)

    def delete(self, todo_id: str) -> bool:
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
            return cur.rowcount > 0

    def delete_all(self) -> int:
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table}")
            return cur.rowcount

    def list(self) -> List[TodoEntity]:
        with self._conn() as conn:
            rows = conn.execute(
                f"SELECT * FROM {_COLS.table} ORDER BY {_COLS.created_at} DESC, rowid DESC"
            ).fetchall()
            return [self._row_to_entity(r) for r in rows]
