"""FastAPI dependencies."""

from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, Request

from magic_todo.errors import StoreUnavailable, TaskNotFound
from magic_todo.services.todo_list_controller import TodoListController


async def get_controller(request: Request) -> TodoListController:
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="Todo list not initialised")
    return controller


@contextmanager
def store_errors() -> Iterator[None]:
    """Turn controller errors into HTTP responses: unknown id → 404, store down → 503."""
    try:
        yield
    except TaskNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
