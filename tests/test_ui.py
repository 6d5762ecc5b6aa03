import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from todo_api.main import app  # noqa: E402
from todo_api.themes import DEFAULT_THEME, THEMES, get_theme  # noqa: E402

client = TestClient(app)


@pytest.fixture(autouse=True)
def clean_store():
    client.request("DELETE", "/todos", params={"all": "true"})
    yield


class TestPage:
    def test_empty_page(self):
        res = client.get("/")
        assert res.status_code == 200
        assert res.headers["content-type"].startswith("text/html")
        assert "No todos yet. Add your first one!" in res.text
        assert 'class="stats"' not in res.text

    def test_lists_todos_with_stats(self):
        client.post("/todos", json={"title": "Water plants"})
        done = client.post("/todos", json={"title": "Pay rent"}).json()
        client.put("/todos", json={"id": done["id"], "done": True})

        res = client.get("/")
        assert "Water plants" in res.text
        assert "Pay rent" in res.text
        assert "Total: 2" in res.text
        assert "Completed: 1" in res.text
        assert "Remaining: 1" in res.text

    def test_titles_are_escaped(self):
        client.post("/todos", json={"title": "<script>alert(1)</script>"})
        res = client.get("/")
        assert "<script>alert(1)</script>" not in res.text
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in res.text

    @pytest.mark.parametrize("name", sorted(THEMES))
    def test_theme_selection(self, name):
        theme = THEMES[name]
        res = client.get("/", params={"theme": name})
        assert res.status_code == 200
        assert f"theme-{name}" in res.text
        assert theme.heading in res.text
        assert theme.placeholder in res.text

    def test_unknown_theme_falls_back(self):
        res = client.get("/", params={"theme": "neon"})
        assert res.status_code == 200
        assert f"theme-{DEFAULT_THEME}" in res.text


class TestThemes:
    def test_lookup_is_case_insensitive(self):
        assert get_theme(" Classic ").name == "classic"

    def test_fallback_chain(self):
        assert get_theme(None, "soft").name == "soft"
        assert get_theme("nope", "also-nope").name == DEFAULT_THEME

    def test_themes_share_component_copy_keys(self):
        for theme in THEMES.values():
            assert theme.heading and theme.empty_message and theme.delete_prompt
