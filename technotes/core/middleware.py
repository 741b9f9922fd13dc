"""
Middlewares: contexto por petición (X-Request-Id + access log) y CORS.
"""
import logging
import time
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from technotes.core.config import settings

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Asigna el request id (o respeta el del cliente) y deja una línea de acceso por petición.

    El id queda en `request.state.request_id`; los handlers de error lo copian al body.
    """

    def __init__(self, app: FastAPI) -> None:
        super().__init__(app)
        self.log = logging.getLogger("technotes.request")

    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = rid
        start = time.perf_counter()
        status_code = 500  # si call_next revienta, el handler genérico responde 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            self.log.info(
                "%s %s -> %s (%dms) request_id=%s",
                request.method,
                request.url.path,
                status_code,
                int((time.perf_counter() - start) * 1000),
                rid,
            )


def add_middlewares(app: FastAPI) -> None:
    if settings.cors_allow_any:
        # Regex abierta sin credentials: CORS no permite "*" con cookies
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*",
            allow_methods=["GET", "POST", "PATCH", "DELETE"],
            allow_headers=["*"],
            allow_credentials=False,
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["GET", "POST", "PATCH", "DELETE"],
            allow_headers=["*"],
            allow_credentials=True,
        )
    app.add_middleware(RequestContextMiddleware)
