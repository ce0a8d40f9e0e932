"""Integration tests for the todo and gamification endpoints.

Tests exercise the full HTTP stack via ASGI test client against an
in-memory SQLite database.
"""

from unittest.mock import AsyncMock, patch

import pytest

from magic_todo.errors import StoreUnavailable


async def _add(client, task: str, **extra) -> list[dict]:
    resp = await client.post("/api/v1/todos", json={"task": task, **extra})
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_add_and_list(client):
    await _add(client, "Write report", due_date="2024-01-02", category="Work")
    todos = await _add(client, "Water plants")

    resp = await client.get("/api/v1/todos")
    assert resp.status_code == 200
    assert resp.json() == todos
    assert [t["task"] for t in todos] == ["Write report", "Water plants"]
    assert [t["order"] for t in todos] == [0, 1]
    assert todos[0]["due_label"] == "Jan 2nd, 2024"
    assert todos[1]["category_label"] == "Uncategorized"
    assert todos[1]["due_label"] == "No Due Date"


@pytest.mark.asyncio
async def test_add_empty_text_rejected(client):
    resp = await client.post("/api/v1/todos", json={"task": "   "})
    assert resp.status_code == 422
    assert (await client.get("/api/v1/todos")).json() == []


@pytest.mark.asyncio
async def test_edit(client):
    (todo,) = await _add(client, "Old text")
    resp = await client.patch(f"/api/v1/todos/{todo['id']}", json={"task": "New text"})
    assert resp.status_code == 200
    assert resp.json()["task"] == "New text"


@pytest.mark.asyncio
async def test_unknown_todo_is_404(client):
    resp = await client.post("/api/v1/todos/4242/toggle")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_toggle_updates_gamification(client):
    (todo,) = await _add(client, "Run")
    resp = await client.post(f"/api/v1/todos/{todo['id']}/toggle")
    assert resp.status_code == 200
    assert resp.json()[0]["is_complete"] is True

    resp = await client.get("/api/v1/gamification")
    assert resp.json() == {
        "xp": 10,
        "streak": 1,
        "last_complete_date": "2024-01-01",
        "label": "XP: 10 | Streak: 1 day",
    }


@pytest.mark.asyncio
async def test_delete(client):
    await _add(client, "Keep")
    todos = await _add(client, "Drop")
    resp = await client.delete(f"/api/v1/todos/{todos[1]['id']}")
    assert resp.status_code == 200
    assert [t["task"] for t in resp.json()] == ["Keep"]


@pytest.mark.asyncio
async def test_reorder_and_drag(client):
    for text in ("A", "B", "C"):
        todos = await _add(client, text)
    ids = [t["id"] for t in todos]

    resp = await client.post("/api/v1/todos/reorder", json={"from_index": 2, "to_index": 0})
    assert resp.status_code == 200
    body = resp.json()
    assert body["updates"] == [[ids[2], 0], [ids[0], 1], [ids[1], 2]]
    assert [t["task"] for t in body["todos"]] == ["C", "A", "B"]

    resp = await client.post("/api/v1/todos/drag", json={"active_id": ids[2], "over_id": None})
    assert resp.json()["updates"] == []

    resp = await client.post("/api/v1/todos/drag", json={"active_id": ids[2], "over_id": ids[1]})
    assert [t["task"] for t in resp.json()["todos"]] == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_reorder_bad_index_is_422(client):
    await _add(client, "Only")
    resp = await client.post("/api/v1/todos/reorder", json={"from_index": 3, "to_index": 0})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_store_unavailable_is_503(client, task_store):
    with patch.object(task_store, "query", AsyncMock(side_effect=StoreUnavailable("down"))):
        resp = await client.get("/api/v1/todos")
    assert resp.status_code == 503


@pytest.mark.asyncio
async def test_toggle_of_task_deleted_elsewhere_is_404(client, task_store):
    (todo,) = await _add(client, "Gone soon")
    await task_store.delete(todo["id"])
    resp = await client.post(f"/api/v1/todos/{todo['id']}/toggle")
    assert resp.status_code == 404
    assert (await client.get("/api/v1/gamification")).json()["xp"] == 0
