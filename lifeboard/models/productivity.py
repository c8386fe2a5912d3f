"""Task, note and pomodoro session models."""

from __future__ import annotations

import enum
from datetime import UTC, datetime

from sqlalchemy import JSON, Boolean, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lifeboard.database import Base
from lifeboard.models.base import TimestampMixin, UserOwnedMixin, UUIDMixin


class Task(UUIDMixin, UserOwnedMixin, TimestampMixin, Base):
    """To-do item."""

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class Note(UUIDMixin, UserOwnedMixin, TimestampMixin, Base):
    """Free-form note."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)


class PomodoroType(str, enum.Enum):
    WORK = "work"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"


class PomodoroSession(UUIDMixin, UserOwnedMixin, TimestampMixin, Base):
    """A finished pomodoro interval."""

    __tablename__ = "pomodoro_sessions"

    type: Mapped[PomodoroType] = mapped_column(
        Enum(PomodoroType, name="pomodoro_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # seconds
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True, default=lambda: datetime.now(UTC)
    )
    tasks: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
