"""Repo de la colección de notas (tickets)."""
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from technotes.core.config import settings
from technotes.domain.models import Note
from technotes.repositories.ids import parse_object_id

TICKET_COUNTER_ID = "ticket"
# Campo del owner en los documentos (compatible con las notas ya existentes)
OWNER_FIELD = "user"


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _to_note(doc: Dict[str, Any]) -> Note:
    return Note(
        id=str(doc["_id"]),
        ticket=int(doc["ticket"]),
        user_id=str(doc.get(OWNER_FIELD)),
        title=doc.get("title") or "",
        text=doc.get("text") or "",
        completed=bool(doc.get("completed", False)),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


class NoteRepository:
    """Note Store sobre Motor. Los tickets salen de un contador atómico."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._notes = db[settings.notes_collection]
        self._counters = db[settings.counters_collection]

    async def ensure_ticket_counter(self) -> None:
        """Crea el contador si no existe, de modo que el primer ticket sea `ticket_seq_start`."""
        await self._counters.update_one(
            {"_id": TICKET_COUNTER_ID},
            {"$setOnInsert": {"seq": settings.ticket_seq_start - 1}},
            upsert=True,
        )

    async def next_ticket(self) -> int:
        doc = await self._counters.find_one_and_update(
            {"_id": TICKET_COUNTER_ID},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(doc["seq"])

    async def insert(self, user_id: str, title: str, text: str, completed: bool) -> Note:
        """Inserta nota con ticket y timestamps; ValueError si el owner no es un ObjectId."""
        owner = parse_object_id(user_id)
        if owner is None:
            raise ValueError(f"invalid owner id: {user_id!r}")
        now = _now_iso()
        data = {
            "ticket": await self.next_ticket(),
            OWNER_FIELD: owner,
            "title": title,
            "text": text,
            "completed": completed,
            "created_at": now,
            "updated_at": now,
        }
        res = await self._notes.insert_one(data)
        data["_id"] = res.inserted_id
        return _to_note(data)

    async def list_all(self) -> List[Note]:
        """Todas las notas en orden de inserción."""
        cursor = self._notes.find({}).sort("_id", 1)
        return [_to_note(d) async for d in cursor]

    async def list_by_owner(self, user_id: str) -> List[Note]:
        owner = parse_object_id(user_id)
        if owner is None:
            return []
        cursor = self._notes.find({OWNER_FIELD: owner}).sort("_id", 1)
        return [_to_note(d) async for d in cursor]

    async def find_by_ticket(self, ticket: int) -> Optional[Note]:
        doc = await self._notes.find_one({"ticket": ticket})
        return _to_note(doc) if doc else None

    async def update(self, ticket: int, title: str, text: str, completed: bool) -> bool:
        """Aplica los campos en un solo $set. False si el ticket ya no existe."""
        res = await self._notes.update_one(
            {"ticket": ticket},
            {"$set": {"title": title, "text": text, "completed": completed, "updated_at": _now_iso()}},
        )
        return res.matched_count > 0

    async def delete(self, ticket: int) -> bool:
        res = await self._notes.delete_one({"ticket": ticket})
        return res.deleted_count > 0
