from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from magic_todo.models.base import Base, TimestampMixin


class GamificationEntry(Base, TimestampMixin):
    """One key of the local gamification store. ``value`` holds a JSON scalar."""

    __tablename__ = "gamification_kv"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
