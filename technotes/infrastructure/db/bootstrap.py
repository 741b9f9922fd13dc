"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar colecciones mínimas y consistencia.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.errors import PyMongoError
from technotes.infrastructure.db.mongo import get_db
from technotes.core.config import settings
from technotes.repositories.note_repo import NoteRepository

_log = logging.getLogger("technotes.mongo.bootstrap")


NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": [
        "ticket",
        "user",
        "title",
        "text",
        "completed",
        "created_at",
        "updated_at",
    ],
    "properties": {
        "ticket": {"bsonType": ["int", "long"], "minimum": 0},
        "user": {"bsonType": "objectId"},
        "title": {"bsonType": "string", "minLength": 1},
        "text": {"bsonType": "string", "minLength": 1},
        "completed": {"bsonType": "bool"},
        "created_at": {"bsonType": "string", "minLength": 10},
        "updated_at": {"bsonType": "string", "minLength": 10},
    },
    "additionalProperties": True,
}


async def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if name not in await db.list_collection_names():
            if validator:
                await db.create_collection(name, validator={"$jsonSchema": validator})
            else:
                await db.create_collection(name)
        elif validator:
            await db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # No aborta el arranque; solo deja sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


async def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        opts = dict(ix)
        keys = opts.pop("keys")
        try:
            await coll.create_index(keys, **opts)
        except PyMongoError as e:
            # Ignora fallas de índice (e.g., ya existe o datos no únicos previos)
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


async def ensure_collections() -> None:
    """
    Garantiza colecciones, validadores, índices y el contador de tickets.
    La colección de usuarios pertenece al subsistema de identidad; aquí solo se lee.
    """
    await _collmod_or_create(settings.notes_collection, NOTE_VALIDATOR)
    await _ensure_indexes(
        settings.notes_collection,
        [
            {"keys": [("ticket", 1)], "unique": True, "name": "uniq_ticket"},
            {"keys": [("user", 1)], "name": "ix_note_user"},
        ],
    )
    await _collmod_or_create(settings.counters_collection, None)
    try:
        await NoteRepository(get_db()).ensure_ticket_counter()
    except PyMongoError as e:
        _log.warning("No se pudo inicializar el contador de tickets: %s", e)
