"""Health (sin auth), salidas tipadas y estables."""
from fastapi import APIRouter, status

from technotes.core.config import settings
from technotes.infrastructure.db.mongo import db_ready
from technotes.api.schemas.health import PingOut, HealthOut


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable


@router.get("/ping", response_model=PingOut, summary="Ping básico")
def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica")
def health() -> HealthOut:
    return HealthOut(ok=True, app_name=settings.app_name, db_ready=db_ready())
