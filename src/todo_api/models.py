from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    Storage-level representation of a Todo row shared by all repository
    backends.

    Fields:
    - id: Opaque unique string identifier (uuid4 hex), never reassigned
    - title: Trimmed, non-empty title
    - done: Completion flag
    - created_at: UTC creation timestamp
    - updated_at: UTC timestamp of the last write (>= created_at)
    """

    id: str
    title: str
    done: bool
    created_at: datetime
    updated_at: datetime
