"""Display labels for todos and the gamification banner."""

from datetime import date
from typing import Optional

from magic_todo.schemas.todo import TodoRead, TodoResponse
from magic_todo.services.streak_service import GamificationState

UNCATEGORIZED = "Uncategorized"
NO_DUE_DATE = "No Due Date"


def ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def due_label(due: Optional[date]) -> str:
    """e.g. "Jan 1st, 2024"."""
    if due is None:
        return NO_DUE_DATE
    return f"{due.strftime('%b')} {ordinal(due.day)}, {due.year}"


def category_label(category: Optional[str]) -> str:
    return category or UNCATEGORIZED


def gamification_label(state: GamificationState) -> str:
    days = "day" if state.streak == 1 else "days"
    return f"XP: {state.xp} | Streak: {state.streak} {days}"


def to_response(todo: TodoRead) -> TodoResponse:
    return TodoResponse(
        **todo.model_dump(),
        category_label=category_label(todo.category),
        due_label=due_label(todo.due_date),
    )
