from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuración centralizada del backend con validación de tipos."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_to_file: bool = True
    cors_origins: list[str] = Field(default=["http://localhost:5173", "http://127.0.0.1:5173"])

    # Catalogo de plantillas (JSON). Si no se define se usa el catalogo estandar
    milestone_catalog_path: Optional[str] = Field(default=None)

    # Geometria del timeline (dias)
    default_span_days: int = Field(default=60, ge=1, le=3650)
    span_padding_days: int = Field(default=14, ge=0, le=365)
    min_span_days: int = Field(default=30, ge=1, le=3650)
    max_header_days: int = Field(default=3660, ge=0, le=36600)

    # Editor
    new_milestone_duration_days: int = Field(default=7, ge=0, le=3650)
    default_milestone_color: str = Field(default="#3B82F6", min_length=1)

    # Sesiones en memoria
    session_ttl_seconds: int = Field(default=3600, ge=10, le=86400)
    session_max_size: int = Field(default=100, ge=1, le=10000)

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Singleton cacheado para evitar recargar .env en cada request."""
    return Settings()


settings = get_settings()
