"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers)."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from pymongo.errors import PyMongoError

from technotes.core.config import settings
from technotes.infrastructure.db.mongo import init_mongo, db_ready, close_mongo
from technotes.infrastructure.db.bootstrap import ensure_collections
from technotes.api.router import api_router
from technotes.core.logging import setup_logging
from technotes.core.middleware import add_middlewares
from technotes.core.exceptions import register_exception_handlers

_log = logging.getLogger("technotes.startup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_mongo()
    # Garantiza colecciones/índices/validadores mínimos si hay conexión
    if db_ready():
        try:
            await ensure_collections()
        except PyMongoError as e:
            # No impedir el arranque si fallan validadores/índices
            _log.warning("ensure_collections() falló: %s", e)
    else:
        _log.warning("Mongo no listo; omitiendo ensure_collections()")
    yield
    close_mongo()


setup_logging(settings.log_level)
app = FastAPI(title=settings.app_name, lifespan=lifespan)

add_middlewares(app)
register_exception_handlers(app)

# Monta routers bajo el prefijo configurado
app.include_router(api_router, prefix=settings.api_prefix_normalized)
