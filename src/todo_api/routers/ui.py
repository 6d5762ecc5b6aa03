from __future__ import annotations

import os
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..schemas import TodoOut
from ..service import TodoService
from ..settings import get_settings
from ..themes import THEMES, get_theme
from .todos import get_service

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")
templates = Jinja2Templates(directory=TEMPLATES_DIR)

router = APIRouter(tags=["ui"])


# PUBLIC_INTERFACE
@router.get("/", response_class=HTMLResponse, summary="Todo List Page", include_in_schema=False)
def index(
    request: Request,
    theme: Optional[str] = Query(None, description="Theme name: " + ", ".join(sorted(THEMES))),
    service: TodoService = Depends(get_service),
):
    """
    Render the todo list page. The initial list is embedded in the page; the
    page script refetches /todos after every mutation.
    """
    selected = get_theme(theme, get_settings().ui_theme)
    todos = [TodoOut(**t).model_dump(mode="json", by_alias=True) for t in service.list_todos()]
    return templates.TemplateResponse(
        request,
        "index.html",
        {"theme": selected, "todos": todos, "api_url": "/todos"},
    )
