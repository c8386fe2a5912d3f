"""Habit management and the completion streak tracker."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from lifeboard.logger import get_logger
from lifeboard.models import Habit
from lifeboard.schemas.habit import HabitCreate, HabitUpdate
from lifeboard.services.errors import ConflictError, NotFoundError
from lifeboard.services.streaks import next_streak

logger = get_logger(__name__)

MAX_COMPLETION_ATTEMPTS = 3


async def create_habit(db: AsyncSession, user_id: UUID, data: HabitCreate) -> Habit:
    habit = Habit(
        user_id=user_id,
        name=data.name,
        description=data.description,
        type=data.type,
        frequency=data.frequency,
        goal=data.goal,
        streak=0,
        completed=False,
        completion_dates_raw=[],
        reminder_enabled=data.reminder.enabled,
        reminder_time=data.reminder.time,
    )
    db.add(habit)
    await db.commit()
    await db.refresh(habit)
    logger.info("Habit created", habit_id=str(habit.id))
    return habit


async def list_habits(db: AsyncSession, user_id: UUID) -> list[Habit]:
    result = await db.execute(select(Habit).where(Habit.user_id == user_id).order_by(Habit.created_at.desc()))
    return list(result.scalars().all())


async def get_habit(db: AsyncSession, user_id: UUID, habit_id: UUID, *, refresh: bool = False) -> Habit:
    query = select(Habit).where(Habit.id == habit_id).where(Habit.user_id == user_id)
    if refresh:
        query = query.execution_options(populate_existing=True)
    result = await db.execute(query)
    habit = result.scalar_one_or_none()
    if not habit:
        raise NotFoundError("Habit", habit_id)
    return habit


async def update_habit(db: AsyncSession, user_id: UUID, habit_id: UUID, data: HabitUpdate) -> Habit:
    habit = await get_habit(db, user_id, habit_id)
    update_data = data.model_dump(exclude_unset=True)

    reminder = update_data.pop("reminder", None)
    if reminder is not None:
        habit.reminder_enabled = reminder["enabled"]
        habit.reminder_time = reminder["time"]

    for field, value in update_data.items():
        if value is None:
            continue
        setattr(habit, field, value)

    await db.commit()
    await db.refresh(habit)
    return habit


async def delete_habit(db: AsyncSession, user_id: UUID, habit_id: UUID) -> None:
    habit = await get_habit(db, user_id, habit_id)
    await db.delete(habit)
    await db.commit()


async def complete_habit(
    db: AsyncSession,
    user_id: UUID,
    habit_id: UUID,
    *,
    now: datetime | None = None,
) -> Habit:
    """Record a completion at ``now`` and advance the streak.

    The write is guarded by the habit's version column. When another writer
    got there first the habit is reloaded and the completion re-applied on
    top of the fresh history.

    Raises:
        NotFoundError: habit is absent or owned by someone else
        ConflictError: the version check kept failing
    """
    moment = now or datetime.now(UTC)

    for attempt in range(1, MAX_COMPLETION_ATTEMPTS + 1):
        habit = await get_habit(db, user_id, habit_id, refresh=attempt > 1)
        history = habit.completion_dates
        habit.streak = next_streak(habit.streak, history, moment)
        habit.append_completion(moment)
        try:
            await db.commit()
        except StaleDataError:
            await db.rollback()
            logger.warning(
                "Habit changed concurrently, retrying completion",
                habit_id=str(habit_id),
                attempt=attempt,
                max_attempts=MAX_COMPLETION_ATTEMPTS,
            )
            continue

        await db.refresh(habit)
        logger.info("Habit completed", habit_id=str(habit_id), streak=habit.streak)
        return habit

    raise ConflictError("Habit was modified concurrently; please retry")
