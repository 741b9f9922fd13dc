"""Registros de dominio: User (solo lectura), Note y Ack."""
from typing import Optional

from pydantic import BaseModel, ConfigDict

from technotes.domain.roles import RoleSet


class User(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    active: bool = False
    roles: RoleSet = RoleSet()
    # El array `roles` almacenado no estaba vacío (aunque sus valores sean desconocidos)
    has_roles: bool = False


class Note(BaseModel):
    id: str
    ticket: int
    user_id: str
    title: str
    text: str
    completed: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Ack(BaseModel):
    message: str
