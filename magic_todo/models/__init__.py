from magic_todo.models.base import Base, TimestampMixin
from magic_todo.models.todo import Todo
from magic_todo.models.gamification import GamificationEntry

__all__ = [
    "Base",
    "TimestampMixin",
    "Todo",
    "GamificationEntry",
]
