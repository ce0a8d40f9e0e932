from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./magic_todo.db"
    # Create missing tables on startup (dev/sqlite). Use alembic for MySQL/MariaDB.
    DB_AUTO_CREATE: bool = True

    # App
    APP_DEBUG: bool = False
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000

    # Gamification
    XP_PER_COMPLETION: int = 10
    # "cumulative": streak counts distinct completion days and never resets.
    # "consecutive": a gap of more than one day resets the streak to 1.
    STREAK_POLICY: str = "cumulative"

    # Ordering
    # Persist a reorder as one transaction instead of one write per task.
    REORDER_ATOMIC: bool = False
    # Renumber surviving tasks after a delete so order values stay contiguous.
    RENUMBER_ON_DELETE: bool = False

    @field_validator("STREAK_POLICY", mode="before")
    @classmethod
    def normalise_streak_policy(cls, v: str) -> str:
        value = (v or "cumulative").strip().lower()
        if value not in ("cumulative", "consecutive"):
            raise ValueError("STREAK_POLICY must be 'cumulative' or 'consecutive'")
        return value

    @field_validator("XP_PER_COMPLETION")
    @classmethod
    def check_xp_per_completion(cls, v: int) -> int:
        if v < 0:
            raise ValueError("XP_PER_COMPLETION must not be negative")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
