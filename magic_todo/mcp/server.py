"""FastMCP server instance – mounted inside FastAPI."""

from typing import Optional

from fastmcp import FastMCP

from magic_todo.services.todo_list_controller import TodoListController

mcp = FastMCP(
    name="MagicTodo",
    instructions=(
        "Magic To-Do tools for listing, adding, editing, completing, deleting "
        "and reordering tasks in a single ordered to-do list, and for reading "
        "the XP and daily streak earned by completing them."
    ),
)

_controller: Optional[TodoListController] = None


def bind_controller(controller: Optional[TodoListController]) -> None:
    """Called from the app lifespan with the process's list controller."""
    global _controller
    _controller = controller


def get_controller() -> TodoListController:
    if _controller is None:
        raise RuntimeError("Todo list controller is not bound")
    return _controller


# Import tool modules to register @mcp.tool decorators
from magic_todo.mcp.tools import todo_tools  # noqa: E402, F401
