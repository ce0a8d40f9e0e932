"""Async engine and session factory."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from magic_todo.config import get_settings
from magic_todo.models.base import Base

settings = get_settings()

engine = create_async_engine(settings.DATABASE_URL, echo=settings.APP_DEBUG, pool_pre_ping=True)

AsyncSessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create any missing tables. Alembic owns the schema outside of dev."""
    import magic_todo.models  # noqa: F401  registers mappers on Base.metadata

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
