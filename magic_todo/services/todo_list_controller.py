"""Todo list controller: the in-memory ordered view and its sync with the task store."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from magic_todo.config import Settings
from magic_todo.errors import StoreUnavailable, TaskNotFound, ValidationError
from magic_todo.schemas.todo import TodoCreate, TodoRead
from magic_todo.services.gamification_store import SqlGamificationStore
from magic_todo.services.order_reconciler import reconcile
from magic_todo.services.streak_service import GamificationState, StreakEngine, StreakPolicy
from magic_todo.services.task_store import SqlTaskStore, TaskStore, order_updates

logger = logging.getLogger(__name__)


def validate_task_text(text: Optional[str]) -> str:
    if text is None or not text.strip():
        raise ValidationError("Task text must not be empty")
    return text


class TodoListController:
    """
    Keeps an ordered in-memory copy of the todo collection.

    Writes go to the task store first; the in-memory list is then refreshed
    from the store with ``list()``. Reorder is the exception: the new order is
    applied locally before it is written, and a failed write is not rolled
    back. ``diverged`` stays True from such a failure until the next
    successful ``list()``.
    """

    def __init__(
        self,
        store: TaskStore,
        streak_engine: StreakEngine,
        *,
        today: Callable[[], date] = date.today,
        reorder_atomic: bool = False,
        renumber_on_delete: bool = False,
    ):
        self._store = store
        self._streak_engine = streak_engine
        self._today = today
        self._reorder_atomic = reorder_atomic
        self._renumber_on_delete = renumber_on_delete
        self._todos: list[TodoRead] = []
        self.diverged = False

    @property
    def todos(self) -> list[TodoRead]:
        return list(self._todos)

    @property
    def gamification(self) -> GamificationState:
        return self._streak_engine.state

    def _get(self, todo_id: int) -> TodoRead:
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        raise TaskNotFound(todo_id)

    def index_of(self, todo_id: int) -> int:
        for index, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return index
        raise TaskNotFound(todo_id)

    async def start(self) -> None:
        """Seed gamification and prime the list. A failed first fetch leaves it empty."""
        await self._streak_engine.seed()
        try:
            await self.list()
        except StoreUnavailable:
            logger.warning("Initial todo fetch failed; starting with an empty view")

    async def list(self) -> list[TodoRead]:
        records = await self._store.query()
        self._todos = list(records)
        if self.diverged:
            logger.info("Todo ordering resynchronised from store")
        self.diverged = False
        return self.todos

    async def add(
        self, text: str, due_date: Optional[date] = None, category: Optional[str] = None
    ) -> Optional[int]:
        """Insert a todo at the end of the list. Empty text is ignored and returns None."""
        try:
            text = validate_task_text(text)
        except ValidationError:
            logger.debug("Ignoring add with empty task text")
            return None

        record = TodoCreate(
            task=text,
            due_date=due_date,
            category=category or "",
            order=len(self._todos),
            is_complete=False,
        )
        todo_id = await self._store.insert(record)
        logger.info("Added todo id=%s order=%s", todo_id, record.order)
        await self.list()
        return todo_id

    async def edit(self, todo_id: int, new_text: str) -> None:
        # Empty text is accepted here; only add rejects it.
        todo = self._get(todo_id)
        await self._store.update(todo_id, {"task": new_text})
        todo.task = new_text

    async def toggle(self, todo_id: int) -> GamificationState:
        todo = self._get(todo_id)
        new_status = not todo.is_complete
        await self._store.update(todo_id, {"is_complete": new_status})
        logger.info("Todo id=%s is_complete=%s", todo_id, new_status)

        # Un-completing never takes XP or streak back. The stored flag has
        # changed, so the view is resynchronised even if the XP write fails.
        try:
            if new_status:
                await self._streak_engine.on_complete(self._today())
        finally:
            await self.list()
        return self._streak_engine.state

    async def delete(self, todo_id: int) -> None:
        self._get(todo_id)
        await self._store.delete(todo_id)
        logger.info("Deleted todo id=%s", todo_id)

        if self._renumber_on_delete:
            survivors = [todo for todo in self._todos if todo.id != todo_id]
            updates = order_updates(survivors)
            if updates:
                await self._store.update_orders(updates)
                logger.debug("Renumbered %d todos after delete", len(updates))

        await self.list()

    async def reorder(self, from_index: int, to_index: int) -> list[tuple[int, int]]:
        """
        Move the todo at ``from_index`` to ``to_index``.

        Returns the (id, order) writes issued; empty for a null move.
        """
        if not 0 <= from_index < len(self._todos):
            raise IndexError(f"No todo at index {from_index}")

        ids = [todo.id for todo in self._todos]
        new_order, updates = reconcile(ids, ids[from_index], to_index)
        if not updates:
            return updates

        by_id = {todo.id: todo for todo in self._todos}
        self._todos = [by_id[todo_id] for todo_id in new_order]
        for index, todo in enumerate(self._todos):
            todo.order = index

        await self._persist_order(updates)
        return updates

    async def drag_end(self, active_id: int, over_id: Optional[int]) -> list[tuple[int, int]]:
        """Handle one finished drag gesture: move ``active_id`` onto ``over_id``'s slot."""
        if over_id is None or active_id == over_id:
            return []
        return await self.reorder(self.index_of(active_id), self.index_of(over_id))

    async def _persist_order(self, updates: list[tuple[int, int]]) -> None:
        try:
            if self._reorder_atomic:
                await self._store.update_orders(updates)
            else:
                for todo_id, position in updates:
                    await self._store.update(todo_id, {"order": position})
        except (StoreUnavailable, TaskNotFound):
            self.diverged = True
            logger.warning("Reorder write failed; local order differs from store until next list()")
            raise


def build_controller(
    session_factory: async_sessionmaker[AsyncSession], settings: Settings
) -> TodoListController:
    engine = StreakEngine(
        SqlGamificationStore(session_factory),
        xp_per_completion=settings.XP_PER_COMPLETION,
        policy=StreakPolicy(settings.STREAK_POLICY),
    )
    return TodoListController(
        SqlTaskStore(session_factory),
        engine,
        reorder_atomic=settings.REORDER_ATOMIC,
        renumber_on_delete=settings.RENUMBER_ON_DELETE,
    )
