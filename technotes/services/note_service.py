"""
Service layer for notes: validación de payload, resolución del actor y
autorización por rol antes de tocar el Note Store.

Reglas:
- Admin / Manager ven y editan todas las notas; solo ellos pueden borrar.
- Employee ve y edita solo sus propias notas.
- La creación no exige actor (cualquier llamador puede crear para cualquier owner).
"""
from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from pymongo.errors import PyMongoError

from technotes.domain.errors import (
    ForbiddenError,
    InvalidDataError,
    NoContentError,
    NotFoundError,
    UnknownActorError,
)
from technotes.domain.models import Ack, Note, User

_log = logging.getLogger("technotes.notes")

FIELDS_REQUIRED = "All fields are required"


class UserDirectory(Protocol):
    async def get_by_id(self, user_id: str) -> Optional[User]: ...


class NoteStore(Protocol):
    async def insert(self, user_id: str, title: str, text: str, completed: bool) -> Note: ...

    async def list_all(self) -> List[Note]: ...

    async def list_by_owner(self, user_id: str) -> List[Note]: ...

    async def find_by_ticket(self, ticket: int) -> Optional[Note]: ...

    async def update(self, ticket: int, title: str, text: str, completed: bool) -> bool: ...

    async def delete(self, ticket: int) -> bool: ...


def _missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, int):
        # los tickets empiezan en 1 como mínimo; 0 o negativos cuentan como ausentes
        return value <= 0
    return False


def _require(*values: object, completed: object = True) -> None:
    """InvalidDataError si falta algún campo. `completed` solo exige ser bool (False es válido)."""
    if any(_missing(v) for v in values) or completed is None:
        raise InvalidDataError(FIELDS_REQUIRED)
    if not isinstance(completed, bool):
        raise InvalidDataError("completed must be a boolean")


def _ensure_active(user: User, no_roles_message: str) -> None:
    if not user.active:
        raise ForbiddenError("User not active")
    if not user.has_roles:
        raise ForbiddenError(no_roles_message)


class NotesService:
    """Operaciones sobre notas; sin estado propio, los repos se inyectan."""

    def __init__(self, users: UserDirectory, notes: NoteStore) -> None:
        self.users = users
        self.notes = notes

    async def _find_actor(self, actor_id: Optional[str]) -> Optional[User]:
        if _missing(actor_id):
            return None
        return await self.users.get_by_id(str(actor_id))

    async def list_notes(self, actor_id: str) -> List[Note]:
        user = await self._find_actor(actor_id)
        if user is None:
            raise UnknownActorError()
        _ensure_active(user, "Not a valid user")

        if user.roles.is_manager_or_admin:
            notes = await self.notes.list_all()
        elif user.roles.is_employee:
            notes = await self.notes.list_by_owner(user.id)
        else:
            _log.warning("list denied: user=%s roles=%s", user.id, user.roles.to_strings())
            raise ForbiddenError()

        if not notes:
            raise NoContentError()
        return notes

    async def create_note(self, user_id: str, title: str, text: str, completed: Optional[bool]) -> Ack:
        _require(user_id, title, text, completed=completed)
        try:
            note = await self.notes.insert(str(user_id), title, text, completed)
        except (PyMongoError, ValueError) as e:
            _log.warning("insert note failed owner=%s: %s", user_id, e)
            raise InvalidDataError() from e
        _log.info("note created ticket=%s owner=%s", note.ticket, note.user_id)
        return Ack(message="New note created")

    async def update_note(
        self,
        actor_id: str,
        ticket: Optional[int],
        title: str,
        text: str,
        completed: Optional[bool],
    ) -> Ack:
        _require(actor_id, ticket, title, text, completed=completed)

        user = await self._find_actor(actor_id)
        if user is None:
            raise InvalidDataError("User not found")
        _ensure_active(user, "Not a valid User")

        roles = user.roles
        if not (roles.is_manager_or_admin or roles.is_employee):
            _log.warning("update denied: user=%s roles=%s", user.id, roles.to_strings())
            raise ForbiddenError()

        note = await self.notes.find_by_ticket(ticket)
        if note is None:
            raise NotFoundError("Note not found")

        if not roles.is_manager_or_admin and note.user_id != user.id:
            _log.warning("update denied: user=%s ticket=%s owner=%s", user.id, ticket, note.user_id)
            raise ForbiddenError("Not authorized")

        try:
            updated = await self.notes.update(note.ticket, title, text, completed)
        except PyMongoError as e:
            _log.warning("update note failed ticket=%s: %s", ticket, e)
            raise InvalidDataError() from e
        if not updated:
            raise InvalidDataError()

        _log.info("note updated ticket=%s by=%s", note.ticket, user.id)
        return Ack(message=f"Updated ticket {note.ticket}")

    async def delete_note(self, actor_id: str, ticket: Optional[int]) -> Ack:
        _require(actor_id, ticket)

        user = await self._find_actor(actor_id)
        if user is None:
            raise UnknownActorError()
        _ensure_active(user, "User has no assigned roles")
        if not user.roles.is_manager_or_admin:
            _log.warning("delete denied: user=%s ticket=%s", user.id, ticket)
            raise ForbiddenError("Must be admin or manager")

        note = await self.notes.find_by_ticket(ticket)
        if note is None:
            raise InvalidDataError("Note not found")

        if not await self.notes.delete(note.ticket):
            # borrado concurrente entre la lectura y el delete
            raise InvalidDataError("Note not found")
        _log.info("note deleted ticket=%s by=%s", note.ticket, user.id)
        return Ack(message=f"Ticket {ticket} was deleted")
