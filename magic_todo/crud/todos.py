from typing import Any, Iterable, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from magic_todo.crud.base import CRUDBase
from magic_todo.models.todo import Todo
from magic_todo.schemas.todo import TodoCreate

UPDATABLE_FIELDS = frozenset({"task", "due_date", "category", "order", "is_complete"})


class CRUDTodo(CRUDBase[Todo, TodoCreate, TodoCreate]):
    async def get_ordered(self, db: AsyncSession) -> Sequence[Todo]:
        """All todos by display position; ties on order fall back to insertion id."""
        result = await db.execute(select(Todo).order_by(Todo.order.asc(), Todo.id.asc()))
        return result.scalars().all()

    async def update_fields(self, db: AsyncSession, todo_id: int, fields: dict[str, Any]) -> bool:
        """Partial update of one row. Returns False when no row matched."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update todo fields: {sorted(unknown)}")
        if not fields:
            return True
        result = await db.execute(update(Todo).where(Todo.id == todo_id).values(**fields))
        await db.flush()
        return result.rowcount == 1

    async def set_orders(self, db: AsyncSession, updates: Iterable[tuple[int, int]]) -> int:
        """Write every (id, order) pair inside the caller's transaction."""
        written = 0
        for todo_id, position in updates:
            result = await db.execute(
                update(Todo).where(Todo.id == todo_id).values(order=position)
            )
            written += result.rowcount
        await db.flush()
        return written


crud_todo = CRUDTodo(Todo)
