import json
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from magic_todo.models.gamification import GamificationEntry


async def get_value(db: AsyncSession, key: str) -> Optional[Any]:
    entry = await db.get(GamificationEntry, key)
    if entry is None:
        return None
    return json.loads(entry.value)


async def set_value(db: AsyncSession, key: str, value: Any) -> None:
    encoded = json.dumps(value)
    entry = await db.get(GamificationEntry, key)
    if entry is None:
        db.add(GamificationEntry(key=key, value=encoded))
    else:
        entry.value = encoded
        db.add(entry)
    await db.flush()
