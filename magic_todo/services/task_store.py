"""Remote task store: the durable ordered todo collection.

Every call opens its own session and commits on its own, so a sequence of
calls is not atomic. ``update_orders`` is the one batched write.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from magic_todo.crud import crud_todo
from magic_todo.errors import StoreUnavailable, TaskNotFound
from magic_todo.schemas.todo import TodoCreate, TodoRead

logger = logging.getLogger(__name__)


class TaskStore(Protocol):
    async def insert(self, record: TodoCreate) -> int: ...

    async def update(self, todo_id: int, fields: dict) -> None: ...

    async def update_orders(self, updates: Sequence[tuple[int, int]]) -> None: ...

    async def delete(self, todo_id: int) -> None: ...

    async def query(self) -> list[TodoRead]: ...


class SqlTaskStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, action: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as db:
                yield db
                await db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Task store %s failed: %s", action, e)
            raise StoreUnavailable(f"task store {action} failed") from e

    async def insert(self, record: TodoCreate) -> int:
        async with self._session("insert") as db:
            todo = await crud_todo.create(db, obj_in=record)
            todo_id = todo.id
        logger.debug("Inserted todo id=%s order=%s", todo_id, record.order)
        return todo_id

    async def update(self, todo_id: int, fields: dict) -> None:
        async with self._session("update") as db:
            matched = await crud_todo.update_fields(db, todo_id, fields)
        if not matched:
            logger.debug("Update matched no todo id=%s fields=%s", todo_id, sorted(fields))
            raise TaskNotFound(todo_id)

    async def update_orders(self, updates: Sequence[tuple[int, int]]) -> None:
        if not updates:
            return
        async with self._session("update_orders") as db:
            written = await crud_todo.set_orders(db, updates)
        logger.debug("Rewrote order for %d/%d todos in one transaction", written, len(updates))

    async def delete(self, todo_id: int) -> None:
        async with self._session("delete") as db:
            removed = await crud_todo.remove(db, id=todo_id)
        if removed is None:
            logger.debug("Delete matched no todo id=%s", todo_id)

    async def query(self) -> list[TodoRead]:
        async with self._session("query") as db:
            rows = await crud_todo.get_ordered(db)
            return [TodoRead.model_validate(row) for row in rows]


def order_updates(todos: Iterable[TodoRead]) -> list[tuple[int, int]]:
    """(id, index) pairs for the todos whose stored order differs from their position."""
    return [(todo.id, index) for index, todo in enumerate(todos) if todo.order != index]
