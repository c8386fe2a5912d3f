"""Tasks, notes and pomodoro sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lifeboard.logger import get_logger
from lifeboard.models import Note, PomodoroSession, PomodoroType, Task
from lifeboard.models.base import ensure_utc
from lifeboard.schemas.productivity import NoteIn, PomodoroCreate, TaskCreate, TaskUpdate
from lifeboard.services.errors import NotFoundError, ValidationError
from lifeboard.services.periods import DateWindow, server_today

logger = get_logger(__name__)


# --- Tasks -------------------------------------------------------------------


async def create_task(db: AsyncSession, user_id: UUID, data: TaskCreate) -> Task:
    task = Task(
        user_id=user_id,
        title=data.title,
        description=data.description,
        due_date=ensure_utc(data.due_date) if data.due_date else None,
        completed=False,
    )
    db.add(task)
    await db.commit()
    await db.refresh(task)
    return task


async def list_tasks(db: AsyncSession, user_id: UUID) -> list[Task]:
    result = await db.execute(select(Task).where(Task.user_id == user_id).order_by(Task.created_at.desc()))
    return list(result.scalars().all())


async def get_task(db: AsyncSession, user_id: UUID, task_id: UUID) -> Task:
    result = await db.execute(select(Task).where(Task.id == task_id).where(Task.user_id == user_id))
    task = result.scalar_one_or_none()
    if not task:
        raise NotFoundError("Task", task_id)
    return task


async def update_task(
    db: AsyncSession,
    user_id: UUID,
    task_id: UUID,
    data: TaskUpdate,
    *,
    now: datetime | None = None,
) -> Task:
    """Apply a partial update; toggling ``completed`` stamps or clears ``completed_at``."""
    task = await get_task(db, user_id, task_id)
    update_data = data.model_dump(exclude_unset=True)

    if "title" in update_data:
        title = (update_data.pop("title") or "").strip()
        if not title:
            raise ValidationError("Title is required")
        task.title = title
    if "description" in update_data:
        task.description = update_data["description"] or ""
    if "due_date" in update_data:
        due_date = update_data["due_date"]
        task.due_date = ensure_utc(due_date) if due_date else None
    if update_data.get("completed") is not None:
        task.completed = update_data["completed"]
        task.completed_at = (now or datetime.now(UTC)) if task.completed else None

    await db.commit()
    await db.refresh(task)
    return task


async def delete_task(db: AsyncSession, user_id: UUID, task_id: UUID) -> None:
    task = await get_task(db, user_id, task_id)
    await db.delete(task)
    await db.commit()


# --- Notes -------------------------------------------------------------------


async def create_note(db: AsyncSession, user_id: UUID, data: NoteIn) -> Note:
    note = Note(user_id=user_id, title=data.title, description=data.description)
    db.add(note)
    await db.commit()
    await db.refresh(note)
    return note


async def list_notes(db: AsyncSession, user_id: UUID) -> list[Note]:
    result = await db.execute(select(Note).where(Note.user_id == user_id).order_by(Note.created_at.desc()))
    return list(result.scalars().all())


async def get_note(db: AsyncSession, user_id: UUID, note_id: UUID) -> Note:
    result = await db.execute(select(Note).where(Note.id == note_id).where(Note.user_id == user_id))
    note = result.scalar_one_or_none()
    if not note:
        raise NotFoundError("Note", note_id)
    return note


async def update_note(db: AsyncSession, user_id: UUID, note_id: UUID, data: NoteIn) -> Note:
    note = await get_note(db, user_id, note_id)
    note.title = data.title
    note.description = data.description
    await db.commit()
    await db.refresh(note)
    return note


async def delete_note(db: AsyncSession, user_id: UUID, note_id: UUID) -> None:
    note = await get_note(db, user_id, note_id)
    await db.delete(note)
    await db.commit()


# --- Pomodoro ----------------------------------------------------------------


async def record_pomodoro(
    db: AsyncSession,
    user_id: UUID,
    data: PomodoroCreate,
    *,
    now: datetime | None = None,
) -> PomodoroSession:
    session = PomodoroSession(
        user_id=user_id,
        type=data.type,
        duration=data.duration,
        completed_at=now or datetime.now(UTC),
        tasks=list(data.tasks),
    )
    db.add(session)
    await db.commit()
    await db.refresh(session)
    logger.info("Pomodoro recorded", type=session.type.value, duration=session.duration)
    return session


async def pomodoro_stats(db: AsyncSession, user_id: UUID) -> dict[str, Any]:
    """Today's sessions (any type) plus all-time work totals.

    ``total_work_time`` is whole minutes of work sessions; breaks never count.
    """
    today = server_today()
    lower, upper = DateWindow(today, today).utc_bounds()

    result = await db.execute(
        select(PomodoroSession).where(PomodoroSession.user_id == user_id).order_by(PomodoroSession.completed_at)
    )
    sessions = list(result.scalars().all())

    today_sessions = [s for s in sessions if lower <= ensure_utc(s.completed_at) < upper]
    work_sessions = [s for s in sessions if s.type == PomodoroType.WORK]

    return {
        "today": len(today_sessions),
        "total_pomodoros": len(work_sessions),
        "total_work_time": sum(s.duration for s in work_sessions) // 60,
        "today_pomodoros": today_sessions,
    }
