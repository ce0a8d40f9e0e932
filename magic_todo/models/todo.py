from datetime import date
from typing import Optional

from sqlalchemy import Boolean, Date, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from magic_todo.models.base import Base, TimestampMixin


class Todo(Base, TimestampMixin):
    __tablename__ = "todos"
    __table_args__ = (Index("ix_todos_order", "order"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    task: Mapped[str] = mapped_column(Text, nullable=False)
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    # Display position; "order" is quoted by SQLAlchemy where the dialect needs it.
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
