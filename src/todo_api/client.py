from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

from .themes import Theme, get_theme

logger = logging.getLogger(__name__)

Todo = Dict[str, Any]


# PUBLIC_INTERFACE
class TodoListView:
    """
    Client-side state for the todo list, driven over HTTP.

    Mirrors what the browser page does: the list is replaced wholesale by the
    result of GET /todos after every successful mutation, never patched
    locally. Failed requests (non-2xx or transport errors) are logged and
    leave the current state untouched.

    Edit flow per row:
        Viewing --start_edit--> Editing --save_edit--> Viewing (PUT + refetch)
        Editing --cancel_edit--> Viewing (no request)
    Starting an edit on another row discards the previous edit buffer.

    Args:
        http: an httpx.Client whose base_url points at the service (a
            FastAPI TestClient works too).
        theme: theme name; supplies copy such as the delete prompt.
        confirm: called with the delete prompt; deletion proceeds only when it
            returns True. Defaults to always confirming.
        api_path: path of the todos collection.
    """

    def __init__(
        self,
        http: httpx.Client,
        theme: Optional[str] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        api_path: str = "/todos",
    ) -> None:
        self._http = http
        self._api_path = api_path
        self._confirm = confirm or (lambda prompt: True)
        self.theme: Theme = get_theme(theme)
        self.todos: List[Todo] = []
        self.title: str = ""
        self.loading: bool = False
        self.editing_id: Optional[str] = None
        self.editing_title: str = ""

    def _send(self, method: str, action: str, body: Dict[str, Any]) -> bool:
        try:
            res = self._http.request(method, self._api_path, json=body)
        except httpx.HTTPError as exc:
            logger.warning("Failed to %s: %s", action, exc)
            return False
        if res.is_success:
            return True
        logger.warning("Failed to %s: HTTP %s", action, res.status_code)
        return False

    # PUBLIC_INTERFACE
    def fetch_todos(self) -> bool:
        """Replace the local list with the server's. Returns True on success."""
        try:
            res = self._http.get(self._api_path)
        except httpx.HTTPError as exc:
            logger.warning("Failed to fetch todos: %s", exc)
            return False
        if not res.is_success:
            logger.warning("Failed to fetch todos: HTTP %s", res.status_code)
            return False
        try:
            todos = res.json()
        except ValueError as exc:
            logger.warning("Failed to fetch todos: invalid JSON (%s)", exc)
            return False
        self.todos = todos
        return True

    # PUBLIC_INTERFACE
    def add_todo(self) -> bool:
        """Create a todo from the current input text."""
        title = self.title.strip()
        if not title:
            return False
        self.loading = True
        try:
            if not self._send("POST", "add todo", {"title": title}):
                return False
            self.title = ""
            self.fetch_todos()
            return True
        finally:
            self.loading = False

    # PUBLIC_INTERFACE
    def toggle_todo(self, todo_id: str, done: bool) -> bool:
        """Flip the done flag of a todo whose current value is `done`."""
        if not self._send("PUT", "toggle todo", {"id": todo_id, "done": not done}):
            return False
        self.fetch_todos()
        return True

    def start_edit(self, todo: Todo) -> None:
        self.editing_id = todo["id"]
        self.editing_title = todo["title"]

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.editing_title = ""

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    # PUBLIC_INTERFACE
    def save_edit(self) -> bool:
        """Send the edit buffer as the new title and leave edit mode on success."""
        if self.editing_id is None:
            return False
        title = self.editing_title.strip()
        if not title:
            return False
        if not self._send("PUT", "update todo", {"id": self.editing_id, "title": title}):
            return False
        self.cancel_edit()
        self.fetch_todos()
        return True

    # PUBLIC_INTERFACE
    def delete_todo(self, todo_id: str) -> bool:
        """Delete a todo after the user confirms."""
        if not self._confirm(self.theme.delete_prompt):
            return False
        if not self._send("DELETE", "delete todo", {"id": todo_id}):
            return False
        self.fetch_todos()
        return True

    def stats(self) -> Dict[str, int]:
        """Counts shown in the list footer."""
        completed = sum(1 for t in self.todos if t["done"])
        return {
            "total": len(self.todos),
            "completed": completed,
            "remaining": len(self.todos) - completed,
        }
