"""Tasks API router."""

from uuid import UUID

from fastapi import APIRouter, status

from lifeboard.deps import CurrentUserId, DbSession
from lifeboard.schemas import TaskCreate, TaskResponse, TaskUpdate
from lifeboard.services import productivity
from lifeboard.services.errors import ServiceError
from lifeboard.utils import raise_for_service_error

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
async def list_tasks(db: DbSession, user_id: CurrentUserId) -> list[TaskResponse]:
    """List tasks, newest first."""
    items = await productivity.list_tasks(db, user_id)
    return [TaskResponse.model_validate(item) for item in items]


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(data: TaskCreate, db: DbSession, user_id: CurrentUserId) -> TaskResponse:
    task = await productivity.create_task(db, user_id, data)
    return TaskResponse.model_validate(task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(task_id: UUID, data: TaskUpdate, db: DbSession, user_id: CurrentUserId) -> TaskResponse:
    try:
        task = await productivity.update_task(db, user_id, task_id, data)
    except ServiceError as exc:
        raise_for_service_error(exc)
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: UUID, db: DbSession, user_id: CurrentUserId) -> None:
    try:
        await productivity.delete_task(db, user_id, task_id)
    except ServiceError as exc:
        raise_for_service_error(exc)
