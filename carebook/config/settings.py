"""
Runtime configuration, read from the environment and ``.env``.
"""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMATS = ("colored", "json", "plain")
NOTIFICATION_BACKENDS = ("database", "log")


class Settings(BaseSettings):
    """
    Configuración de carebook.

    Los nombres de campo coinciden con las variables de entorno
    (``case_sensitive=True``).
    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Carebook Scheduling API"
    PROJECT_DESCRIPTION: str = "Slot allocation and appointment booking engine"
    VERSION: str = "0.1.0"
    DEBUG: bool = Field(False, description="Modo de depuración: docs habilitadas, CORS abierto, sin pool")
    ENVIRONMENT: str = Field("production", description="Entorno de ejecución")
    CORS_ORIGINS: list[str] = Field(default_factory=list, description="Orígenes permitidos fuera de DEBUG")

    # PostgreSQL
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "carebook"
    DB_USER: str = "postgres"
    DB_PASSWORD: str | None = None
    DB_ECHO: bool = Field(False, description="Loguear SQL emitido por SQLAlchemy")
    DB_POOL_SIZE: int = Field(20, description="Conexiones permanentes del pool")
    DB_MAX_OVERFLOW: int = Field(30, description="Conexiones extra bajo carga")
    DB_POOL_RECYCLE: int = Field(3600, description="Segundos antes de reciclar una conexión")
    DB_POOL_TIMEOUT: int = Field(30, description="Segundos de espera por una conexión libre")

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = Field("colored", description="colored, json o plain")

    # Appointment notifications, delivered after commit
    NOTIFICATIONS_ENABLED: bool = True
    NOTIFICATION_BACKEND: str = Field("database", description="database (tabla notifications) o log")
    NOTIFICATION_DRAIN_TIMEOUT: float = Field(5.0, description="Segundos para drenar notificaciones al apagar")

    SENTRY_DSN: str | None = None

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v: int) -> int:
        if not 1 <= v <= 100:
            raise ValueError("DB_POOL_SIZE must be between 1 and 100")
        return v

    @field_validator("DB_MAX_OVERFLOW")
    @classmethod
    def validate_max_overflow(cls, v: int) -> int:
        if not 0 <= v <= 200:
            raise ValueError("DB_MAX_OVERFLOW must be between 0 and 200")
        return v

    @field_validator("DB_POOL_TIMEOUT", "DB_POOL_RECYCLE")
    @classmethod
    def validate_positive_seconds(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("pool timings must be positive")
        return v

    @field_validator("NOTIFICATION_DRAIN_TIMEOUT")
    @classmethod
    def validate_drain_timeout(cls, v: float) -> float:
        if v < 0:
            raise ValueError("NOTIFICATION_DRAIN_TIMEOUT must not be negative")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL '{v}'")
        return level

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be one of: {', '.join(LOG_FORMATS)}")
        return v

    @field_validator("NOTIFICATION_BACKEND")
    @classmethod
    def validate_notification_backend(cls, v: str) -> str:
        if v not in NOTIFICATION_BACKENDS:
            raise ValueError(f"NOTIFICATION_BACKEND must be one of: {', '.join(NOTIFICATION_BACKENDS)}")
        return v

    def _dsn(self, scheme: str) -> str:
        credentials = quote_plus(self.DB_USER)
        if self.DB_PASSWORD:
            credentials += f":{quote_plus(self.DB_PASSWORD)}"
        return f"{scheme}://{credentials}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def async_database_url(self) -> str:
        """URL de la aplicación (asyncpg)."""
        return self._dsn("postgresql+asyncpg")

    @computed_field
    @property
    def database_url(self) -> str:
        """URL síncrona (psycopg2), usada por Alembic."""
        return self._dsn("postgresql")


@lru_cache
def get_settings() -> Settings:
    return Settings()
