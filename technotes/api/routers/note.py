"""
Endpoints para `notes` (tickets).

El id del actor llega por path/body; los errores del servicio se traducen a
HTTP en `technotes.core.exceptions`.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from technotes.api.deps import get_notes_service
from technotes.api.schemas.note import MessageOut, NoteCreate, NoteDelete, NoteOut, NoteUpdate
from technotes.services.note_service import NotesService


router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "/{user_id}",
    response_model=List[NoteOut],
    summary="Listar notas",
    description="Admin/Manager reciben todas las notas; Employee solo las propias.",
)
async def get_all_notes(user_id: str, service: NotesService = Depends(get_notes_service)) -> List[NoteOut]:
    notes = await service.list_notes(user_id)
    return [NoteOut.from_note(n) for n in notes]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageOut,
    summary="Crear nota",
)
async def create_new_note(payload: NoteCreate, service: NotesService = Depends(get_notes_service)) -> MessageOut:
    ack = await service.create_note(payload.user_id, payload.title, payload.text, payload.completed)
    return MessageOut(message=ack.message)


@router.patch("", response_model=MessageOut, summary="Actualizar nota")
async def update_note(payload: NoteUpdate, service: NotesService = Depends(get_notes_service)) -> MessageOut:
    ack = await service.update_note(
        payload.user_id,
        payload.ticket,
        payload.title,
        payload.text,
        payload.completed,
    )
    return MessageOut(message=ack.message)


@router.delete("", response_model=MessageOut, summary="Borrar nota (Admin/Manager)")
async def delete_note(payload: NoteDelete, service: NotesService = Depends(get_notes_service)) -> MessageOut:
    ack = await service.delete_note(payload.user_id, payload.ticket)
    return MessageOut(message=ack.message)
