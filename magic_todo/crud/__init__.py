from magic_todo.crud.todos import crud_todo
from magic_todo.crud.gamification import get_value as get_gamification_value
from magic_todo.crud.gamification import set_value as set_gamification_value

__all__ = [
    "crud_todo",
    "get_gamification_value",
    "set_gamification_value",
]
