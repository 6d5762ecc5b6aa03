from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Theme:
    """
    Palette and copy for the todo list page. Every theme renders the same
    component with the same actions; only presentation differs.
    """

    name: str
    heading: str
    placeholder: str
    empty_message: str
    delete_prompt: str
    background: str
    surface: str
    text: str
    muted: str
    accent: str
    accent_text: str
    secondary: str
    border: str
    footer_background: str


THEMES: Dict[str, Theme] = {
    "mono": Theme(
        name="mono",
        heading="Todo List",
        placeholder="Add new todo...",
        empty_message="No todos yet. Add your first one!",
        delete_prompt="Delete this todo?",
        background="#ffffff",
        surface="#ffffff",
        text="#000000",
        muted="#999999",
        accent="#000000",
        accent_text="#ffffff",
        secondary="#666666",
        border="#000000",
        footer_background="#f8f8f8",
    ),
    "classic": Theme(
        name="classic",
        heading="My Todos",
        placeholder="What needs to be done?",
        empty_message="Nothing to do. Enjoy your day!",
        delete_prompt="Are you sure you want to delete this todo?",
        background="#f3f6fb",
        surface="#ffffff",
        text="#1f2937",
        muted="#9ca3af",
        accent="#2563eb",
        accent_text="#ffffff",
        secondary="#6b7280",
        border="#d1d5db",
        footer_background="#e5edff",
    ),
    "soft": Theme(
        name="soft",
        heading="Daily Tasks",
        placeholder="Write a task...",
        empty_message="Your list is empty. Start by adding a task.",
        delete_prompt="Remove this task?",
        background="#fdf6f0",
        surface="#fffaf5",
        text="#4a3f35",
        muted="#b8a99a",
        accent="#e0a899",
        accent_text="#4a3f35",
        secondary="#c9b8a8",
        border="#ead9c9",
        footer_background="#f7ebe0",
    ),
}

DEFAULT_THEME = "mono"


# PUBLIC_INTERFACE
def get_theme(name: Optional[str], default: str = DEFAULT_THEME) -> Theme:
    """Return the named theme, falling back to `default` and then to mono."""
    key = (name or "").strip().lower()
    if key in THEMES:
        return THEMES[key]
    return THEMES.get(default, THEMES[DEFAULT_THEME])
