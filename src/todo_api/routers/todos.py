from __future__ import annotations

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from ..repositories import Repository, get_repository
from ..schemas import DeleteAllResult, DeleteResult, TodoCreate, TodoDelete, TodoOut, TodoUpdate
from ..service import TodoService

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)

_ERROR_RESPONSES = {
    400: {"description": "Missing or empty required field"},
    500: {"description": "Store error or todo not found"},
}


def get_service(repo: Repository = Depends(get_repository)) -> TodoService:
    """
    Dependency building a service over the shared repository.
    """
    return TodoService(repo)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every todo, newest first.",
    responses={500: _ERROR_RESPONSES[500]},
)
def list_todos(service: TodoService = Depends(get_service)) -> List[TodoOut]:
    return [TodoOut(**it) for it in service.list_todos()]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a todo from a non-empty title. New todos start with done=false.",
    responses={201: {"description": "Todo created"}, **_ERROR_RESPONSES},
)
def create_todo(payload: TodoCreate, service: TodoService = Depends(get_service)) -> TodoOut:
    created = service.create_todo(payload.title)
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.put(
    "",
    response_model=TodoOut,
    summary="Update Todo",
    description=(
        "Update a todo identified by `id` in the body. `done` is applied when it is a boolean; "
        "`title` is applied when it is non-empty after trimming. Omitted fields are unchanged."
    ),
    responses={200: {"description": "Todo updated"}, **_ERROR_RESPONSES},
)
def update_todo(payload: TodoUpdate, service: TodoService = Depends(get_service)) -> TodoOut:
    updated = service.update_todo(payload.id, done=payload.done, title=payload.title)
    return TodoOut(**updated)


async def _read_delete_payload(request: Request) -> Optional[TodoDelete]:
    """
    Parse the single-delete body. Only called once delete-all has been ruled
    out, so a delete-all request never has its body inspected.
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return TodoDelete.model_validate_json(raw)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


# PUBLIC_INTERFACE
@router.delete(
    "",
    response_model=Union[DeleteAllResult, DeleteResult],
    summary="Delete Todo(s)",
    description=(
        "Delete the todo whose `id` is given in the body, or every todo when called with "
        "`?all=true` (the body is then ignored)."
    ),
    responses={200: {"description": "Todo(s) deleted"}, **_ERROR_RESPONSES},
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {"application/json": {"schema": TodoDelete.model_json_schema()}},
        }
    },
)
async def delete_todos(
    request: Request,
    delete_all: Optional[str] = Query(None, alias="all", description="Set to 'true' to delete every todo"),
    service: TodoService = Depends(get_service),
) -> Union[DeleteAllResult, DeleteResult]:
    if delete_all == "true":
        count = await run_in_threadpool(service.delete_all_todos)
        return DeleteAllResult(deleted_count=count, message=f"Successfully deleted {count} todos")

    payload = await _read_delete_payload(request)
    await run_in_threadpool(service.delete_todo, payload.id if payload else None)
    return DeleteResult()
