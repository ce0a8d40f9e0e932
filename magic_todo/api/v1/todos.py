"""Todo list endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from magic_todo.api.v1.deps import get_controller, store_errors
from magic_todo.schemas.todo import (
    DragEndRequest,
    ReorderRequest,
    ReorderResult,
    TodoAddRequest,
    TodoEditRequest,
    TodoResponse,
)
from magic_todo.services.display import to_response
from magic_todo.services.todo_list_controller import TodoListController

router = APIRouter(prefix="/todos", tags=["todos"])

Controller = Annotated[TodoListController, Depends(get_controller)]


def _current(controller: TodoListController) -> list[TodoResponse]:
    return [to_response(todo) for todo in controller.todos]


@router.get("", response_model=list[TodoResponse])
async def list_todos(controller: Controller):
    with store_errors():
        await controller.list()
    return _current(controller)


@router.post("", response_model=list[TodoResponse], status_code=201)
async def add_todo(body: TodoAddRequest, controller: Controller):
    if not body.task.strip():
        raise HTTPException(422, "Task text must not be empty")
    with store_errors():
        await controller.add(body.task, due_date=body.due_date, category=body.category)
    return _current(controller)


@router.patch("/{todo_id}", response_model=TodoResponse)
async def edit_todo(todo_id: int, body: TodoEditRequest, controller: Controller):
    with store_errors():
        await controller.edit(todo_id, body.task)
        return to_response(controller.todos[controller.index_of(todo_id)])


@router.post("/{todo_id}/toggle", response_model=list[TodoResponse])
async def toggle_todo(todo_id: int, controller: Controller):
    with store_errors():
        await controller.toggle(todo_id)
    return _current(controller)


@router.delete("/{todo_id}", response_model=list[TodoResponse])
async def delete_todo(todo_id: int, controller: Controller):
    with store_errors():
        await controller.delete(todo_id)
    return _current(controller)


@router.post("/reorder", response_model=ReorderResult)
async def reorder_todos(body: ReorderRequest, controller: Controller):
    try:
        with store_errors():
            updates = await controller.reorder(body.from_index, body.to_index)
    except IndexError as e:
        raise HTTPException(422, str(e)) from e
    return ReorderResult(updates=updates, todos=_current(controller))


@router.post("/drag", response_model=ReorderResult)
async def drag_end(body: DragEndRequest, controller: Controller):
    with store_errors():
        updates = await controller.drag_end(body.active_id, body.over_id)
    return ReorderResult(updates=updates, todos=_current(controller))
