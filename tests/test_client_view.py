import os

import httpx
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from todo_api.client import TodoListView  # noqa: E402
from todo_api.main import app  # noqa: E402

client = TestClient(app)


@pytest.fixture(autouse=True)
def clean_store():
    client.request("DELETE", "/todos", params={"all": "true"})
    yield


@pytest.fixture
def view():
    v = TodoListView(client)
    v.fetch_todos()
    return v


def add(view, title):
    view.title = title
    assert view.add_todo() is True


class TestAdd:
    def test_add_refetches_and_clears_input(self, view):
        add(view, "  Buy milk ")
        assert view.title == ""
        assert view.loading is False
        assert [t["title"] for t in view.todos] == ["Buy milk"]
        assert view.todos[0]["done"] is False

    def test_blank_input_sends_nothing(self, view):
        view.title = "   "
        assert view.add_todo() is False
        assert view.todos == []
        assert client.get("/todos").json() == []

    def test_new_items_appear_first(self, view):
        add(view, "one")
        add(view, "two")
        assert [t["title"] for t in view.todos] == ["two", "one"]


class TestToggle:
    def test_toggle_twice(self, view):
        add(view, "Toggle")
        todo = view.todos[0]
        assert view.toggle_todo(todo["id"], todo["done"]) is True
        assert view.todos[0]["done"] is True
        assert view.toggle_todo(todo["id"], view.todos[0]["done"]) is True
        assert view.todos[0]["done"] is False
        assert view.todos[0]["title"] == "Toggle"


class TestEdit:
    def test_save_edit(self, view):
        add(view, "Draft")
        view.start_edit(view.todos[0])
        assert view.is_editing
        assert view.editing_title == "Draft"
        view.editing_title = "Final"
        assert view.save_edit() is True
        assert not view.is_editing
        assert view.editing_title == ""
        assert view.todos[0]["title"] == "Final"

    def test_cancel_edit_makes_no_request(self, view):
        add(view, "Untouched")
        before = client.get("/todos").json()
        view.start_edit(view.todos[0])
        view.editing_title = "Changed"
        view.cancel_edit()
        assert not view.is_editing
        assert client.get("/todos").json() == before

    def test_blank_edit_stays_in_edit_mode(self, view):
        add(view, "Keep")
        view.start_edit(view.todos[0])
        view.editing_title = "  "
        assert view.save_edit() is False
        assert view.is_editing
        assert client.get("/todos").json()[0]["title"] == "Keep"

    def test_starting_another_edit_discards_buffer(self, view):
        add(view, "first")
        add(view, "second")
        second, first = view.todos
        view.start_edit(first)
        view.editing_title = "unsaved"
        view.start_edit(second)
        assert view.editing_id == second["id"]
        assert view.editing_title == "second"


class TestDelete:
    def test_delete_requires_confirmation(self):
        prompts = []
        answers = iter([False, True])

        def confirm(prompt):
            prompts.append(prompt)
            return next(answers)

        view = TodoListView(client, confirm=confirm)
        add(view, "Doomed")
        todo_id = view.todos[0]["id"]

        assert view.delete_todo(todo_id) is False
        assert len(client.get("/todos").json()) == 1

        assert view.delete_todo(todo_id) is True
        assert view.todos == []
        assert prompts == ["Delete this todo?", "Delete this todo?"]

    def test_theme_supplies_prompt(self):
        prompts = []
        view = TodoListView(client, theme="classic", confirm=lambda p: prompts.append(p) or False)
        add(view, "x")
        view.delete_todo(view.todos[0]["id"])
        assert prompts == ["Are you sure you want to delete this todo?"]

    def test_failed_delete_keeps_state(self, view, caplog):
        add(view, "Stay")
        snapshot = list(view.todos)
        with caplog.at_level("WARNING", logger="todo_api.client"):
            assert view.delete_todo("missing") is False
        assert view.todos == snapshot
        assert "Failed to delete todo" in caplog.text


class TestFailures:
    def test_transport_error_is_silent(self, caplog):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.Client(transport=httpx.MockTransport(refuse), base_url="http://todo.test")
        view = TodoListView(http)
        view.todos = [{"id": "a", "title": "cached", "done": False}]
        view.title = "new"
        with caplog.at_level("WARNING", logger="todo_api.client"):
            assert view.fetch_todos() is False
            assert view.add_todo() is False
        assert view.todos == [{"id": "a", "title": "cached", "done": False}]
        assert view.title == "new"
        assert view.loading is False
        assert "connection refused" in caplog.text

    def test_server_error_keeps_list(self):
        http = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "boom"})),
            base_url="http://todo.test",
        )
        view = TodoListView(http)
        view.todos = [{"id": "a", "title": "cached", "done": True}]
        assert view.fetch_todos() is False
        assert view.toggle_todo("a", True) is False
        assert view.todos[0]["done"] is True


    def test_non_json_list_keeps_state(self, caplog):
        http = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>proxy</html>")),
            base_url="http://todo.test",
        )
        view = TodoListView(http)
        view.todos = [{"id": "a", "title": "cached", "done": False}]
        with caplog.at_level("WARNING", logger="todo_api.client"):
            assert view.fetch_todos() is False
        assert view.todos == [{"id": "a", "title": "cached", "done": False}]
        assert "invalid JSON" in caplog.text


class TestLoading:
    def test_loading_is_set_while_create_is_in_flight(self):
        seen = []
        holder = {}

        def handler(request):
            if request.method == "POST":
                seen.append(holder["view"].loading)
                return httpx.Response(201, json={"id": "a", "title": "x", "done": False})
            return httpx.Response(200, json=[])

        http = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://todo.test")
        view = holder["view"] = TodoListView(http)
        view.title = "x"
        assert view.loading is False
        assert view.add_todo() is True
        assert seen == [True]
        assert view.loading is False

    def test_loading_clears_after_failed_create(self):
        seen = []
        holder = {}

        def handler(request):
            seen.append(holder["view"].loading)
            return httpx.Response(500, json={"error": "Failed to create todo"})

        http = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://todo.test")
        view = holder["view"] = TodoListView(http)
        view.title = "x"
        assert view.add_todo() is False
        assert seen == [True]
        assert view.loading is False
        assert view.title == "x"


def test_stats(view):
    assert view.stats() == {"total": 0, "completed": 0, "remaining": 0}
    add(view, "a")
    add(view, "b")
    add(view, "c")
    view.toggle_todo(view.todos[0]["id"], False)
    assert view.stats() == {"total": 3, "completed": 1, "remaining": 2}
