"""Pydantic schemas for habits and habit insights."""

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import Field

from lifeboard.models import HabitFrequency, HabitType
from lifeboard.schemas.base import BaseResponse, CamelModel

ReminderTime = Annotated[str, Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]


class Reminder(CamelModel):
    enabled: bool = False
    time: ReminderTime = "09:00"


class HabitCreate(CamelModel):
    name: Annotated[str, Field(min_length=1, max_length=255)]
    description: Annotated[str, Field(max_length=1000)] = ""
    type: HabitType
    frequency: HabitFrequency = HabitFrequency.DAILY
    goal: Annotated[str, Field(max_length=255)] = ""
    reminder: Reminder = Field(default_factory=Reminder)


class HabitUpdate(CamelModel):
    """Editable habit fields; streak and completion history are owned by the tracker."""

    name: Annotated[str | None, Field(min_length=1, max_length=255)] = None
    description: Annotated[str | None, Field(max_length=1000)] = None
    type: HabitType | None = None
    frequency: HabitFrequency | None = None
    goal: Annotated[str | None, Field(max_length=255)] = None
    completed: bool | None = None
    reminder: Reminder | None = None


class HabitResponse(BaseResponse):
    id: UUID
    user_id: UUID
    name: str
    description: str
    type: HabitType
    frequency: HabitFrequency
    goal: str
    streak: int
    completed: bool
    completion_dates: list[datetime]
    reminder: Reminder
    version: int
    created_at: datetime
    updated_at: datetime


class HabitRecommendation(CamelModel):
    name: str
    description: str = ""
    type: str = HabitType.POSITIVE.value
    reason: str = ""


class HabitAnalysisResponse(CamelModel):
    analysis: str


class HabitMotivationResponse(CamelModel):
    motivation: str


class HabitCompletionStats(CamelModel):
    """Per-habit history summary fed into the analysis prompt."""

    name: str
    streak: int
    completion_count: int
    last_completion: datetime | None

    def as_prompt_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
