from magic_todo.schemas.todo import (
    TodoCreate,
    TodoRead,
    TodoResponse,
    TodoAddRequest,
    TodoEditRequest,
    ReorderRequest,
    DragEndRequest,
    ReorderResult,
)
from magic_todo.schemas.gamification import GamificationResponse
