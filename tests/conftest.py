"""Pytest fixtures for unit and integration tests."""
from datetime import date
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from magic_todo.models import Base
from magic_todo.services.gamification_store import SqlGamificationStore
from magic_todo.services.streak_service import StreakEngine
from magic_todo.services.task_store import SqlTaskStore
from magic_todo.services.todo_list_controller import TodoListController

# One shared in-memory SQLite connection; every store call opens its own session on it.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeClock:
    """Callable returning a settable 'today'."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def task_store(session_factory) -> SqlTaskStore:
    return SqlTaskStore(session_factory)


@pytest.fixture
def gamification_store(session_factory) -> SqlGamificationStore:
    return SqlGamificationStore(session_factory)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(date(2024, 1, 1))


@pytest_asyncio.fixture
async def controller(task_store, gamification_store, clock) -> TodoListController:
    ctrl = TodoListController(task_store, StreakEngine(gamification_store), today=clock)
    await ctrl.start()
    return ctrl


@pytest_asyncio.fixture
async def client(controller) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client wired to the test controller."""
    from magic_todo.main import app

    app.state.controller = controller
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.state.controller = None
