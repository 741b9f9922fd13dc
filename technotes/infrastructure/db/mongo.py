"""Cliente MongoDB asíncrono (Motor).

Un único cliente por proceso; se inicializa en el lifespan de FastAPI y los
repositorios piden la base con `get_db()`.
"""
from __future__ import annotations

import certifi
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from technotes.core.config import settings

_log = logging.getLogger("technotes.mongo")

_client: Optional[AsyncIOMotorClient] = None
_db: Optional[AsyncIOMotorDatabase] = None


def _build_client() -> AsyncIOMotorClient:
    uri = settings.mongo_uri
    kwargs = dict(serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms)
    if settings.mongo_uses_tls:
        # SRV ya implica TLS; proveemos CA bundle para robustez
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        if settings.mongo_tls_insecure:
            kwargs["tlsAllowInvalidCertificates"] = True
        if settings.mongo_tls_allow_invalid_hostnames:
            kwargs["tlsAllowInvalidHostnames"] = True
    return AsyncIOMotorClient(uri, **kwargs)


async def init_mongo() -> None:
    """
    Inicializa el cliente y valida conexión (ping).
    Llamar una sola vez en el startup de FastAPI; no tumba la app si falla.
    """
    global _client, _db
    client = _build_client()
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        _log.warning("Mongo no accesible: %s", e)
        client.close()
        _client = None
        _db = None
        return
    _client = client
    _db = client[settings.mongo_db]
    _log.info("Mongo conectado (db=%s)", settings.mongo_db)


def get_db() -> AsyncIOMotorDatabase:
    """
    Devuelve la referencia a la base de datos.
    Úsalo en repositorios/servicios, no en routers.
    """
    if _db is None:
        raise RuntimeError("Mongo no inicializado. Intenta más tarde.")
    return _db


def db_ready() -> bool:
    return _db is not None


def close_mongo() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
        _log.info("Mongo desconectado")
    _client = None
    _db = None
