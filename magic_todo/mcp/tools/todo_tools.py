"""Todo list MCP tools."""

from datetime import date
from typing import Optional

from magic_todo.mcp.server import get_controller, mcp
from magic_todo.services.display import gamification_label, to_response
from magic_todo.services.todo_list_controller import TodoListController


def _todo_rows(controller: TodoListController) -> list[dict]:
    return [to_response(todo).model_dump(mode="json") for todo in controller.todos]


def _gamification_payload(controller: TodoListController) -> dict:
    state = controller.gamification
    return {
        "xp": state.xp,
        "streak": state.streak,
        "last_complete_date": state.last_complete_date,
        "label": gamification_label(state),
    }


@mcp.tool()
async def list_todos() -> list[dict]:
    """List all todos in display order."""
    controller = get_controller()
    await controller.list()
    return _todo_rows(controller)


@mcp.tool()
async def add_todo(
    task: str,
    due_date: Optional[str] = None,
    category: str = "",
) -> list[dict]:
    """Add a todo at the end of the list. due_date is YYYY-MM-DD."""
    if not task.strip():
        raise ValueError("task must not be empty")
    parsed_due = date.fromisoformat(due_date) if due_date else None
    controller = get_controller()
    await controller.add(task, due_date=parsed_due, category=category)
    return _todo_rows(controller)


@mcp.tool()
async def edit_todo(todo_id: int, task: str) -> list[dict]:
    """Replace the text of a todo."""
    controller = get_controller()
    await controller.edit(todo_id, task)
    return _todo_rows(controller)


@mcp.tool()
async def toggle_todo(todo_id: int) -> dict:
    """Flip a todo between done and not done. Returns the list and the XP/streak state."""
    controller = get_controller()
    await controller.toggle(todo_id)
    return {"todos": _todo_rows(controller), "gamification": _gamification_payload(controller)}


@mcp.tool()
async def delete_todo(todo_id: int) -> list[dict]:
    """Delete a todo."""
    controller = get_controller()
    await controller.delete(todo_id)
    return _todo_rows(controller)


@mcp.tool()
async def move_todo(todo_id: int, to_index: int) -> dict:
    """Move a todo to a new 0-based position in the list."""
    controller = get_controller()
    updates = await controller.reorder(controller.index_of(todo_id), to_index)
    return {"updates": updates, "todos": _todo_rows(controller)}


@mcp.tool()
async def get_gamification() -> dict:
    """Current XP and daily streak."""
    return _gamification_payload(get_controller())
