"""FastAPI application wiring for the todo service.

Beginner terms used in this file:
- FastAPI app: the main web application object.
- Route/path operation: a function exposed over HTTP (for example, GET /health).
- response_model: Pydantic model used to validate/shape API responses.
- app.state: a place to store shared runtime objects (here, the storage client).
- Exception handler: converts a raised exception into an HTTP response.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .app.memory import InMemoryTodoStorage
from .app.models import (
    TEXT_REQUIRED,
    CreateTodoRequest,
    DeleteTodoResponse,
    HealthResponse,
    Todo,
    UpdateTodoRequest,
)
from .app.storage import PostgresTodoStorage, StorageError, TodoStorage
from .logging_setup import setup_logging
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

NOT_FOUND = "Todo not found"


def create_app(
    *,
    storage: TodoStorage | None = None,
    settings_override: Settings | None = None,
) -> FastAPI:
    """Application factory.

    The storage client is built once here (or injected by the caller) and
    handed to every route through `app.state`. Tests pass an
    InMemoryTodoStorage so no database is needed.
    """
    settings = settings_override or get_settings()
    todo_storage = storage if storage is not None else build_storage(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # An unreachable database must not stop the process; requests report 500 instead.
        try:
            app.state.storage.migrate()
        except StorageError as exc:
            logger.error("todo_api event=migrate_failed error=%s", exc)
        else:
            logger.info("todo_api event=storage_ready backend=%s", type(todo_storage).__name__)
        yield

    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)
    app.state.storage = todo_storage
    app.state.settings = settings

    # The browser client is served from another origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _validation_message(exc)},
        )

    def _get_storage(request: Request) -> TodoStorage:
        return request.app.state.storage

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(service=settings.app_name)

    @app.get("/", response_model=list[Todo])
    def list_todos(request: Request) -> list[Todo]:
        try:
            return _get_storage(request).list_todos()
        except StorageError:
            logger.exception("todo event=list_failed")
            raise HTTPException(status_code=500, detail="Failed to fetch todos") from None

    # Request body is validated against CreateTodoRequest before this runs.
    @app.post("/", response_model=Todo, status_code=status.HTTP_201_CREATED)
    def create_todo(payload: CreateTodoRequest, request: Request) -> Todo:
        try:
            todo = _get_storage(request).create_todo(payload.text)
        except StorageError:
            logger.exception("todo event=create_failed")
            raise HTTPException(status_code=500, detail="Failed to create todo") from None
        logger.info("todo event=created todo_id=%s", todo.id)
        return todo

    @app.put("/{todo_id}", response_model=Todo)
    def update_todo(todo_id: str, payload: UpdateTodoRequest, request: Request) -> Todo:
        changes = payload.changes()
        try:
            todo = _get_storage(request).update_todo(todo_id, changes)
        except StorageError:
            logger.exception("todo event=update_failed todo_id=%s", todo_id)
            raise HTTPException(status_code=500, detail="Failed to update todo") from None
        if todo is None:
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        logger.info(
            "todo event=updated todo_id=%s fields=%s",
            todo_id,
            sorted(changes.as_document()),
        )
        return todo

    @app.delete("/{todo_id}", response_model=DeleteTodoResponse)
    def delete_todo(todo_id: str, request: Request) -> DeleteTodoResponse:
        try:
            deleted = _get_storage(request).delete_todo(todo_id)
        except StorageError:
            logger.exception("todo event=delete_failed todo_id=%s", todo_id)
            raise HTTPException(status_code=500, detail="Failed to delete todo") from None
        if not deleted:
            raise HTTPException(status_code=404, detail=NOT_FOUND)
        logger.info("todo event=deleted todo_id=%s", todo_id)
        return DeleteTodoResponse()

    return app


def build_storage(settings: Settings) -> TodoStorage:
    """Construct the storage client named by settings; no connection is opened yet."""
    if settings.storage_backend == "memory":
        return InMemoryTodoStorage()
    return PostgresTodoStorage(database_url=settings.resolved_database_url())


def _validation_message(exc: RequestValidationError) -> str:
    """Pick one short, client-safe message out of pydantic's error list."""
    for error in exc.errors():
        ctx_error = (error.get("ctx") or {}).get("error")
        if isinstance(ctx_error, ValueError):
            return str(ctx_error)
        location = tuple(error.get("loc", ()))
        if location[-1:] == ("text",):
            return TEXT_REQUIRED
        if location[-1:] == ("completed",):
            return "completed must be a boolean"
    return "Invalid request body"


def run() -> None:
    """Console entry point: `todo-api`."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        create_app(settings_override=settings),
        host=settings.host,
        port=settings.resolved_port(),
        log_config=None,
    )


if __name__ == "__main__":
    run()
