from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Request body for creating a Todo.

    The title is optional at the schema level so that a missing or blank title
    is reported by the service with a descriptive message instead of a generic
    schema error.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"title": "Buy milk"}})

    title: Optional[str] = Field(default=None, description="Title of the todo; trimmed before storing")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Request body for updating a Todo in place.

    - id is required (checked by the service).
    - done is applied only when it is a JSON boolean; other values are ignored.
    - title is applied only when it is non-empty after trimming.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"id": "3f2b9c0e6d7a4b1c8e5f0a9b2c4d6e8f", "done": True}}
    )

    id: Optional[str] = Field(default=None, description="Identifier of the todo to update")
    done: Any = Field(default=None, description="New completion flag")
    title: Any = Field(default=None, description="New title")


# PUBLIC_INTERFACE
class TodoDelete(BaseModel):
    """Request body for deleting a single Todo."""

    id: Optional[str] = Field(default=None, description="Identifier of the todo to delete")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Todo as returned by the API. Serialized with camelCase keys.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "3f2b9c0e6d7a4b1c8e5f0a9b2c4d6e8f",
                "title": "Buy milk",
                "done": False,
                "createdAt": "2025-01-25T10:15:30.123456Z",
                "updatedAt": "2025-01-25T10:15:30.123456Z",
            }
        },
    )

    id: str = Field(..., description="Unique identifier of the todo")
    title: str = Field(..., description="Title of the todo")
    done: bool = Field(..., description="Completion flag")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


class DeleteResult(BaseModel):
    success: bool = True


class DeleteAllResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    deleted_count: int = Field(..., description="Number of rows removed")
    message: str
