from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class TodoBase(BaseModel):
    task: str
    due_date: Optional[date] = None
    category: str = Field("", max_length=100)


class TodoCreate(TodoBase):
    order: int = Field(0, ge=0)
    is_complete: bool = False


class TodoRead(TodoCreate):
    """In-memory view of one stored todo. Mutated in place by the list controller."""

    model_config = {"from_attributes": True}
    id: int


class TodoResponse(TodoRead):
    category_label: str
    due_label: str


class TodoAddRequest(TodoBase):
    pass


class TodoEditRequest(BaseModel):
    task: str


class ReorderRequest(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int


class DragEndRequest(BaseModel):
    active_id: int
    over_id: Optional[int] = None


class ReorderResult(BaseModel):
    updates: list[tuple[int, int]]
    todos: list[TodoResponse]
