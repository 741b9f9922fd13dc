"""
Logging del servicio: un formato único para `technotes.*` y uvicorn.

El driver de Mongo loguea cada heartbeat en DEBUG; se mantiene en WARNING
salvo que se pida explícitamente con `driver_level`.
"""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _level(name: str, default: int) -> int:
    lvl = logging.getLevelName((name or "").upper())
    return lvl if isinstance(lvl, int) else default


def setup_logging(level: str = "INFO", driver_level: str = "WARNING") -> None:
    lvl = _level(level, logging.INFO)
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    logging.getLogger("technotes").setLevel(lvl)
    logging.getLogger("uvicorn").setLevel(lvl)
    logging.getLogger("uvicorn.access").setLevel(lvl)
    logging.getLogger("pymongo").setLevel(_level(driver_level, logging.WARNING))
