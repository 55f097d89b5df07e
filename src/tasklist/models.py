from __future__ import annotations

from sqlalchemy import Boolean, Integer, Text, false
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# PUBLIC_INTERFACE
class Task(Base):
    """
    ORM model for one row of the ``todos`` table.

    Fields:
    - id: auto-incrementing integer primary key, assigned by the database
    - text: task text (non-empty at creation, trimmed via schemas)
    - completed: completion flag, false for new rows
    """

    __tablename__ = "todos"
    # Never reuse the id of a deleted row on SQLite
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    def __repr__(self) -> str:
        return f"Task(id={self.id!r}, text={self.text!r}, completed={self.completed!r})"
