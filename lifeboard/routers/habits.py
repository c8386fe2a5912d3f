"""Habits API router: CRUD, completion tracking and AI insights."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, status

from lifeboard.deps import AIGenerator, CurrentUserId, DbSession
from lifeboard.logger import get_logger
from lifeboard.schemas import (
    HabitAnalysisResponse,
    HabitCreate,
    HabitMotivationResponse,
    HabitRecommendation,
    HabitResponse,
    HabitUpdate,
)
from lifeboard.services import habit_insights, habits
from lifeboard.services.errors import ServiceError
from lifeboard.utils import raise_for_service_error

router = APIRouter(prefix="/habits", tags=["habits"])
logger = get_logger(__name__)


@router.get("", response_model=list[HabitResponse])
async def list_habits(db: DbSession, user_id: CurrentUserId) -> list[HabitResponse]:
    items = await habits.list_habits(db, user_id)
    return [HabitResponse.model_validate(item) for item in items]


@router.post("", response_model=HabitResponse, status_code=status.HTTP_201_CREATED)
async def create_habit(data: HabitCreate, db: DbSession, user_id: CurrentUserId) -> HabitResponse:
    habit = await habits.create_habit(db, user_id, data)
    return HabitResponse.model_validate(habit)


# AI routes are declared before /{habit_id} so "ai" is never parsed as an id.


@router.get("/ai/recommendations", response_model=list[HabitRecommendation])
async def get_recommendations(
    db: DbSession,
    user_id: CurrentUserId,
    generator: AIGenerator,
    goals: str | None = Query(default=None),
) -> list[HabitRecommendation]:
    """Habit suggestions for the given goals (falls back to a default list)."""
    try:
        return await habit_insights.recommend_habits(db, user_id, generator, goals)
    except ServiceError as exc:
        raise_for_service_error(exc)


@router.get("/ai/analysis", response_model=HabitAnalysisResponse)
async def get_analysis(db: DbSession, user_id: CurrentUserId, generator: AIGenerator) -> HabitAnalysisResponse:
    try:
        analysis = await habit_insights.analyze_habits(db, user_id, generator)
    except ServiceError as exc:
        raise_for_service_error(exc)
    return HabitAnalysisResponse(analysis=analysis)


@router.get("/ai/motivation", response_model=HabitMotivationResponse)
async def get_motivation(
    db: DbSession, user_id: CurrentUserId, generator: AIGenerator
) -> HabitMotivationResponse:
    motivation = await habit_insights.motivate(db, user_id, generator)
    return HabitMotivationResponse(motivation=motivation)


@router.get("/{habit_id}", response_model=HabitResponse)
async def get_habit(habit_id: UUID, db: DbSession, user_id: CurrentUserId) -> HabitResponse:
    try:
        habit = await habits.get_habit(db, user_id, habit_id)
    except ServiceError as exc:
        logger.debug("Habit not found", habit_id=str(habit_id))
        raise_for_service_error(exc)
    return HabitResponse.model_validate(habit)


@router.put("/{habit_id}", response_model=HabitResponse)
async def update_habit(
    habit_id: UUID,
    data: HabitUpdate,
    db: DbSession,
    user_id: CurrentUserId,
) -> HabitResponse:
    try:
        habit = await habits.update_habit(db, user_id, habit_id, data)
    except ServiceError as exc:
        raise_for_service_error(exc)
    return HabitResponse.model_validate(habit)


@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_habit(habit_id: UUID, db: DbSession, user_id: CurrentUserId) -> None:
    try:
        await habits.delete_habit(db, user_id, habit_id)
    except ServiceError as exc:
        raise_for_service_error(exc)


@router.post("/{habit_id}/complete", response_model=HabitResponse)
async def complete_habit(habit_id: UUID, db: DbSession, user_id: CurrentUserId) -> HabitResponse:
    """Record a completion now and return the habit with its updated streak."""
    try:
        habit = await habits.complete_habit(db, user_id, habit_id)
    except ServiceError as exc:
        logger.warning("Habit completion failed", habit_id=str(habit_id), error=str(exc))
        raise_for_service_error(exc)
    return HabitResponse.model_validate(habit)
