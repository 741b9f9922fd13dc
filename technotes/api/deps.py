"""
Dependencias reutilizables para routers (FastAPI Depends).

- Construye el NotesService sobre la DB Mongo actual.
- Mantener esta capa delgada: sin lógica de negocio.
"""
from fastapi import HTTPException
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from technotes.infrastructure.db.mongo import db_ready, get_db
from technotes.repositories.note_repo import NoteRepository
from technotes.repositories.user_repo import UserRepository
from technotes.services.note_service import NotesService


def get_notes_service() -> NotesService:
    if not db_ready():
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Database not available")
    db = get_db()
    return NotesService(users=UserRepository(db), notes=NoteRepository(db))
