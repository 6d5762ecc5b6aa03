import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import OperationFailedError, TodoValidationError
from .logging_config import setup_logging
from .settings import get_settings
from .routers import todos as todos_router
from .routers import ui as ui_router

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "List, create, update and delete todos.",
    },
]

_settings = get_settings()
setup_logging(_settings.log_level)
logger = logging.getLogger("todo_api.main")

app = FastAPI(
    title="Todo App",
    description="Todo list page and the JSON API behind it.",
    version="0.1.0",
    openapi_tags=openapi_tags,
)

# Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed bodies (bad JSON, wrong field types) are client errors like any
    other missing field.

    Response format:
        {
            "error": "Request validation failed",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    return JSONResponse(
        status_code=400,
        content={
            "error": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(TodoValidationError)
async def todo_validation_handler(request: Request, exc: TodoValidationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(OperationFailedError)
async def operation_failed_handler(request: Request, exc: OperationFailedError) -> JSONResponse:
    # Cause already logged by the service; the client only gets the generic message.
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# PUBLIC_INTERFACE
@app.get("/health", summary="Health Check", tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health.
    """
    return {"message": "Healthy", "backend": _settings.persistence_backend}


app.include_router(todos_router.router)
app.include_router(ui_router.router)

logger.info("Todo app ready (backend=%s)", _settings.persistence_backend)


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run("todo_api.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
