"""Local gamification store: a durable key-value table of JSON scalars."""

import logging
from typing import Any, Mapping, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from magic_todo.crud import get_gamification_value, set_gamification_value
from magic_todo.errors import StoreUnavailable

logger = logging.getLogger(__name__)


class GamificationStore(Protocol):
    async def get(self, key: str) -> Optional[Any]: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def set_many(self, values: Mapping[str, Any]) -> None: ...


class SqlGamificationStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, key: str) -> Optional[Any]:
        try:
            async with self._session_factory() as db:
                return await get_gamification_value(db, key)
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Gamification store read of %r failed: %s", key, e)
            raise StoreUnavailable(f"gamification read of {key!r} failed") from e
        except ValueError:
            logger.warning("Gamification key %r holds invalid JSON; treating as unset", key)
            return None

    async def set(self, key: str, value: Any) -> None:
        await self.set_many({key: value})

    async def set_many(self, values: Mapping[str, Any]) -> None:
        """Write all keys in one transaction."""
        try:
            async with self._session_factory() as db:
                for key, value in values.items():
                    await set_gamification_value(db, key, value)
                await db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Gamification store write of %s failed: %s", sorted(values), e)
            raise StoreUnavailable("gamification write failed") from e
