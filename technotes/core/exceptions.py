"""
Global exception handlers for consistent API errors.

Los errores de dominio (`technotes.domain.errors`) se traducen aquí a códigos
HTTP; los servicios no conocen HTTP.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from technotes.domain.errors import (
    ForbiddenError,
    InvalidDataError,
    NoContentError,
    NotesError,
    NotFoundError,
    UnknownActorError,
)

# Orden importa: subclases antes que sus bases
STATUS_BY_ERROR = (
    (UnknownActorError, 401),
    (NotFoundError, 404),
    (ForbiddenError, 403),
    (InvalidDataError, 400),
    (NoContentError, 400),
)


def status_for(exc: NotesError) -> int:
    for cls, code in STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return code
    return 400


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _body(request: Request, message: str, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"message": message, **extra}
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return body


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("technotes.errors")

    @app.exception_handler(NotesError)
    async def _notes_exc_handler(request: Request, exc: NotesError):
        code = status_for(exc)
        log.info("%s %s -> %s %s", request.method, request.url.path, code, exc.message)
        return JSONResponse(status_code=code, content=_body(request, exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=_body(request, exc.detail or "HTTP error"))

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        # `ctx` puede traer excepciones no serializables
        errors = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
        return JSONResponse(status_code=422, content=_body(request, "Validation error", errors=errors))

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error request_id=%s", _req_id(request))
        return JSONResponse(status_code=500, content=_body(request, "Internal server error"))
