"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del repositorio.
- Agrupa ajustes por área: App, CORS, Mongo, Notes, Logging.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from pathlib import Path

# Resuelve el .env ubicado en la raíz del repo (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Conjunto de variables de configuración con valores por defecto razonables.

    Nota: los valores pueden sobreescribirse vía variables de entorno (.env).
    """
    # App
    app_name: str = "TechNotes API"
    api_prefix: str = ""

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    cors_allow_any: bool = False  # Permite todos los orígenes (usa con cuidado)

    # Mongo
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "technotes"
    mongo_tls: bool = False  # Atlas / SRV siempre usa TLS
    # TLS relax options (dev only)
    mongo_tls_insecure: bool = False
    mongo_tls_allow_invalid_hostnames: bool = False
    mongo_server_selection_timeout_ms: int = 15000

    # Notes
    notes_collection: str = "notes"
    users_collection: str = "users"
    counters_collection: str = "counters"
    ticket_seq_start: int = Field(500, ge=0)

    # Logging
    log_level: str = Field(
        "INFO",
        validation_alias=AliasChoices("TECHNOTES_LOG_LEVEL", "LOG_LEVEL"),
    )

    # --- Utilidades derivadas / helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final (excepto cuando es solo '/')
        - Si está vacío, devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref or pref == "/":
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if pref.endswith('/'):
            pref = pref[:-1]
        return pref

    @property
    def mongo_uses_tls(self) -> bool:
        return self.mongo_tls or self.mongo_uri.startswith("mongodb+srv://")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
    )


settings = Settings()
