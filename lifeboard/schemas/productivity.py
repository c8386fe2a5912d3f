"""Pydantic schemas for tasks, notes and pomodoro sessions."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import Field, field_validator

from lifeboard.models import PomodoroType
from lifeboard.schemas.base import BaseResponse, CamelModel

Title = Annotated[str, Field(min_length=1, max_length=255)]


class TaskCreate(CamelModel):
    title: Title
    description: str = ""
    due_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value


class TaskUpdate(CamelModel):
    title: Title | None = None
    description: str | None = None
    due_date: datetime | None = None
    completed: bool | None = None


class TaskResponse(BaseResponse):
    id: UUID
    user_id: UUID
    title: str
    description: str
    due_date: datetime | None
    completed: bool
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime


class NoteIn(CamelModel):
    """Notes are always written whole; title and description are both required."""

    title: Title
    description: Annotated[str, Field(min_length=1)]


class NoteResponse(BaseResponse):
    id: UUID
    user_id: UUID
    title: str
    description: str
    created_at: datetime
    updated_at: datetime


class PomodoroCreate(CamelModel):
    type: PomodoroType
    duration: Annotated[int, Field(gt=0, description="Session length in seconds")]
    tasks: list[str] = Field(default_factory=list)


class PomodoroResponse(BaseResponse):
    id: UUID
    user_id: UUID
    type: PomodoroType
    duration: int
    completed_at: datetime
    tasks: list[str]
    created_at: datetime


class PomodoroStats(CamelModel):
    today: int
    total_pomodoros: int
    total_work_time: int  # minutes
    today_pomodoros: list[PomodoroResponse]
