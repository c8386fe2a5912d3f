"""Pomodoro API router."""

from fastapi import APIRouter, status

from lifeboard.deps import CurrentUserId, DbSession
from lifeboard.schemas import PomodoroCreate, PomodoroResponse, PomodoroStats
from lifeboard.services import productivity

router = APIRouter(prefix="/pomodoro", tags=["pomodoro"])


@router.post("", response_model=PomodoroResponse, status_code=status.HTTP_201_CREATED)
async def record_pomodoro(data: PomodoroCreate, db: DbSession, user_id: CurrentUserId) -> PomodoroResponse:
    """Save a finished pomodoro session."""
    session = await productivity.record_pomodoro(db, user_id, data)
    return PomodoroResponse.model_validate(session)


@router.get("/stats", response_model=PomodoroStats)
async def get_stats(db: DbSession, user_id: CurrentUserId) -> PomodoroStats:
    """Today's sessions and all-time work totals."""
    stats = await productivity.pomodoro_stats(db, user_id)
    return PomodoroStats.model_validate(stats, from_attributes=True)
