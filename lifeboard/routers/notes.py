"""Notes API router."""

from uuid import UUID

from fastapi import APIRouter, status

from lifeboard.deps import CurrentUserId, DbSession
from lifeboard.schemas import NoteIn, NoteResponse
from lifeboard.services import productivity
from lifeboard.services.errors import ServiceError
from lifeboard.utils import raise_for_service_error

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=list[NoteResponse])
async def list_notes(db: DbSession, user_id: CurrentUserId) -> list[NoteResponse]:
    items = await productivity.list_notes(db, user_id)
    return [NoteResponse.model_validate(item) for item in items]


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(data: NoteIn, db: DbSession, user_id: CurrentUserId) -> NoteResponse:
    note = await productivity.create_note(db, user_id, data)
    return NoteResponse.model_validate(note)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(note_id: UUID, data: NoteIn, db: DbSession, user_id: CurrentUserId) -> NoteResponse:
    try:
        note = await productivity.update_note(db, user_id, note_id, data)
    except ServiceError as exc:
        raise_for_service_error(exc)
    return NoteResponse.model_validate(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: UUID, db: DbSession, user_id: CurrentUserId) -> None:
    try:
        await productivity.delete_note(db, user_id, note_id)
    except ServiceError as exc:
        raise_for_service_error(exc)
