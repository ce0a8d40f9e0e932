"""Tests for MCP tool helpers and controller binding."""
from unittest.mock import AsyncMock, patch

import pytest

from magic_todo.errors import StoreUnavailable
from magic_todo.mcp import server
from magic_todo.mcp.tools.todo_tools import _gamification_payload, _todo_rows, move_todo


@pytest.fixture
def bound(controller):
    server.bind_controller(controller)
    yield controller
    server.bind_controller(None)


def test_unbound_controller_raises():
    server.bind_controller(None)
    with pytest.raises(RuntimeError):
        server.get_controller()


@pytest.mark.asyncio
async def test_rows_are_json_ready(bound):
    await bound.add("Stretch", category="Health")
    (row,) = _todo_rows(server.get_controller())
    assert row["task"] == "Stretch"
    assert row["category_label"] == "Health"
    assert row["due_date"] is None
    assert row["due_label"] == "No Due Date"


@pytest.mark.asyncio
async def test_gamification_payload_after_toggle(bound):
    todo_id = await bound.add("Read")
    await bound.toggle(todo_id)
    assert _gamification_payload(bound) == {
        "xp": 10,
        "streak": 1,
        "last_complete_date": "2024-01-01",
        "label": "XP: 10 | Streak: 1 day",
    }


@pytest.mark.asyncio
async def test_move_todo_propagates_store_failure(bound, task_store):
    # @mcp.tool() wraps the coroutine; the plain function sits on .fn
    move = getattr(move_todo, "fn", move_todo)
    first = await bound.add("First")
    await bound.add("Second")
    with patch.object(task_store, "update", AsyncMock(side_effect=StoreUnavailable("down"))):
        with pytest.raises(StoreUnavailable):
            await move(first, 1)
    assert bound.diverged is True
