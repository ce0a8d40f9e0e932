"""Streak and XP logic."""

import enum
import logging
from datetime import date, datetime, timedelta
from typing import Any, NamedTuple, Optional

from magic_todo.errors import StoreUnavailable
from magic_todo.services.gamification_store import GamificationStore

logger = logging.getLogger(__name__)

XP_KEY = "xp"
STREAK_KEY = "streak"
LAST_COMPLETE_DATE_KEY = "lastCompleteDate"

DEFAULT_XP_PER_COMPLETION = 10


class StreakPolicy(str, enum.Enum):
    cumulative = "cumulative"
    consecutive = "consecutive"


class GamificationState(NamedTuple):
    xp: int = 0
    streak: int = 0
    last_complete_date: Optional[str] = None


def parse_day(value: Optional[str]) -> Optional[date]:
    """Parse a stored day key: ISO (2024-01-01) or legacy "Mon Jan 01 2024"."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.strptime(value, "%a %b %d %Y").date()
    except ValueError:
        return None


def apply_completion(
    state: GamificationState,
    today: date,
    *,
    xp_per_completion: int = DEFAULT_XP_PER_COMPLETION,
    policy: StreakPolicy = StreakPolicy.cumulative,
) -> GamificationState:
    """
    Transition for one false -> true completion on ``today``.

    Only the first completion of a calendar day counts.
    """
    today_key = today.isoformat()
    if state.last_complete_date == today_key:
        return state

    new_streak = state.streak + 1
    if policy == StreakPolicy.consecutive and state.last_complete_date is not None:
        last = parse_day(state.last_complete_date)
        if last is None or today - last > timedelta(days=1):
            # Streak broken
            new_streak = 1

    return GamificationState(
        xp=state.xp + xp_per_completion,
        streak=new_streak,
        last_complete_date=today_key,
    )


def _as_count(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return 0
    return max(0, int(raw))


class StreakEngine:
    """Owns the GamificationState and keeps it in step with its store."""

    def __init__(
        self,
        store: GamificationStore,
        *,
        xp_per_completion: int = DEFAULT_XP_PER_COMPLETION,
        policy: StreakPolicy = StreakPolicy.cumulative,
    ):
        self._store = store
        self._xp_per_completion = xp_per_completion
        self._policy = StreakPolicy(policy)
        self._state = GamificationState()

    @property
    def state(self) -> GamificationState:
        return self._state

    async def seed(self) -> GamificationState:
        """Load state from the store. Unset keys or an unreachable store give zeros."""
        try:
            xp = await self._store.get(XP_KEY)
            streak = await self._store.get(STREAK_KEY)
            last = await self._store.get(LAST_COMPLETE_DATE_KEY)
        except StoreUnavailable:
            logger.warning("Gamification store unavailable at seed; starting from zero")
            self._state = GamificationState()
            return self._state

        self._state = GamificationState(
            xp=_as_count(xp),
            streak=_as_count(streak),
            last_complete_date=last if isinstance(last, str) and last else None,
        )
        logger.info(
            "Gamification seeded xp=%d streak=%d last=%s",
            self._state.xp,
            self._state.streak,
            self._state.last_complete_date,
        )
        return self._state

    async def persist(self, state: GamificationState) -> None:
        await self._store.set_many(
            {
                XP_KEY: state.xp,
                STREAK_KEY: state.streak,
                LAST_COMPLETE_DATE_KEY: state.last_complete_date,
            }
        )

    async def on_complete(self, today: date) -> GamificationState:
        """
        Apply one completion. The new state is persisted before it replaces
        the current one; a failed write leaves the engine unchanged.
        """
        new_state = apply_completion(
            self._state,
            today,
            xp_per_completion=self._xp_per_completion,
            policy=self._policy,
        )
        if new_state == self._state:
            logger.debug("Completion on %s already counted today", today)
            return self._state

        await self.persist(new_state)
        self._state = new_state
        logger.info(
            "Completion counted xp=%d streak=%d day=%s",
            new_state.xp,
            new_state.streak,
            new_state.last_complete_date,
        )
        return new_state
