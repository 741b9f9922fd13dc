"""
Esquemas Pydantic para `notes`.

Los bodies aceptan camelCase (como el cliente web) y snake_case. Los campos son
opcionales a nivel de esquema: la falta de datos la reporta el servicio con 400.
"""
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from technotes.domain.models import Note


class NoteCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("userId", "user_id"))
    title: Optional[str] = None
    text: Optional[str] = None
    completed: Optional[bool] = None


class NoteUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("userId", "user_id"))
    ticket: Optional[int] = None
    title: Optional[str] = None
    text: Optional[str] = None
    completed: Optional[bool] = None


class NoteDelete(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("userId", "user_id"))
    ticket: Optional[int] = None


class NoteOut(BaseModel):
    id: str
    ticket: int
    user: str
    title: str
    text: str
    completed: bool
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_note(cls, note: Note) -> "NoteOut":
        return cls(
            id=note.id,
            ticket=note.ticket,
            user=note.user_id,
            title=note.title,
            text=note.text,
            completed=note.completed,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class MessageOut(BaseModel):
    message: str
