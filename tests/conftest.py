"""
Fixtures compartidas: User Directory y Note Store en memoria, servicio y
cliente HTTP (httpx + ASGITransport) con el servicio inyectado.
"""
import asyncio
import os
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

# Antes de importar la app: sin .env real ni logs ruidosos
os.environ.setdefault("LOG_LEVEL", "WARNING")

from technotes.domain.models import Note, User  # noqa: E402
from technotes.domain.roles import Role, RoleSet  # noqa: E402
from technotes.services.note_service import NotesService  # noqa: E402


class FakeUserDirectory:
    def __init__(self) -> None:
        self.users: Dict[str, User] = {}

    def add(self, *roles: Role, active: bool = True, raw_roles: Optional[List[str]] = None) -> User:
        """`raw_roles` simula el array guardado, p.ej. con roles desconocidos."""
        stored = raw_roles if raw_roles is not None else [r.value for r in roles]
        user = User(
            id=str(ObjectId()),
            active=active,
            roles=RoleSet.from_strings(stored),
            has_roles=bool(stored),
        )
        self.users[user.id] = user
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)


class FakeNoteStore:
    def __init__(self, start: int = 500) -> None:
        self.notes: Dict[int, Note] = {}
        self._seq = start - 1

    async def insert(self, user_id: str, title: str, text: str, completed: bool) -> Note:
        if not ObjectId.is_valid(user_id):
            raise ValueError(f"invalid owner id: {user_id!r}")
        self._seq += 1
        note = Note(
            id=str(ObjectId()),
            ticket=self._seq,
            user_id=user_id,
            title=title,
            text=text,
            completed=completed,
        )
        self.notes[note.ticket] = note
        return note

    async def list_all(self) -> List[Note]:
        return list(self.notes.values())

    async def list_by_owner(self, user_id: str) -> List[Note]:
        return [n for n in self.notes.values() if n.user_id == user_id]

    async def find_by_ticket(self, ticket: int) -> Optional[Note]:
        return self.notes.get(ticket)

    async def update(self, ticket: int, title: str, text: str, completed: bool) -> bool:
        # Cede el loop entre lectura y escritura, como una llamada de red
        await asyncio.sleep(0)
        current = self.notes.get(ticket)
        if current is None:
            return False
        self.notes[ticket] = current.model_copy(update={"title": title, "text": text, "completed": completed})
        return True

    async def delete(self, ticket: int) -> bool:
        return self.notes.pop(ticket, None) is not None


@pytest.fixture
def users() -> FakeUserDirectory:
    return FakeUserDirectory()


@pytest.fixture
def store() -> FakeNoteStore:
    return FakeNoteStore()


@pytest.fixture
def service(users, store) -> NotesService:
    return NotesService(users=users, notes=store)


@pytest_asyncio.fixture
async def test_client(service):
    """Cliente HTTP contra la app con `get_notes_service` sobreescrito."""
    from technotes.api.deps import get_notes_service
    from technotes.main import app

    app.dependency_overrides[get_notes_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_notes_service, None)
