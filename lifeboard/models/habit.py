"""Habit model with completion history and streak counter."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import JSON, Boolean, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from lifeboard.database import Base
from lifeboard.models.base import TimestampMixin, UserOwnedMixin, UUIDMixin, ensure_utc


class HabitType(str, enum.Enum):
    """Whether the habit is one to build or one to break."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


class HabitFrequency(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Habit(UUIDMixin, UserOwnedMixin, TimestampMixin, Base):
    """A tracked habit.

    ``completion_dates`` is append-only: entries are never removed or
    reordered. ``streak`` is a denormalized counter derived from the last two
    completions; ``version`` guards the read-modify-write that maintains it.
    """

    __tablename__ = "habits"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    type: Mapped[HabitType] = mapped_column(
        Enum(HabitType, name="habit_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    frequency: Mapped[HabitFrequency] = mapped_column(
        Enum(HabitFrequency, name="habit_frequency_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=HabitFrequency.DAILY,
    )
    goal: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # ISO-8601 UTC timestamps, oldest first
    completion_dates_raw: Mapped[list[str]] = mapped_column(
        "completion_dates", JSON, nullable=False, default=list
    )
    reminder_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reminder_time: Mapped[str] = mapped_column(String(5), nullable=False, default="09:00")
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}

    @property
    def completion_dates(self) -> list[datetime]:
        return [ensure_utc(datetime.fromisoformat(raw)) for raw in self.completion_dates_raw or []]

    def append_completion(self, moment: datetime) -> None:
        # Reassign rather than mutate so the JSON column is flagged dirty
        self.completion_dates_raw = [*(self.completion_dates_raw or []), ensure_utc(moment).isoformat()]

    @property
    def reminder(self) -> dict[str, object]:
        return {"enabled": self.reminder_enabled, "time": self.reminder_time}

    def __repr__(self) -> str:
        return f"<Habit {self.name} streak={self.streak}>"
