# -*- coding: utf-8 -*-
"""
analytics/shared/config/settings_base.py

Base de configuración (Pydantic v2) para el motor de normalización.
- Esta clase NO instancia singletons ni resuelve .env; eso lo hace config_loader.
- Es la base para settings_dev.py, settings_testing.py y settings_prod.py.

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

from typing import Literal, Optional
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


# Tipos de entorno soportados
EnvName = Literal["development", "test", "production"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["plain", "pretty", "json"]


class BaseAppSettings(BaseSettings):
    # =========================
    # Núcleo de la aplicación
    # =========================
    python_env: EnvName = Field(default="development", validation_alias="PYTHON_ENV")
    app_name: str = Field(default="Analytics Normalizer", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")

    # =========================
    # Logging
    # =========================
    log_level: LogLevel = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: LogFormat = Field(default="plain", validation_alias="LOG_FORMAT")
    log_level_normalization: Optional[LogLevel] = Field(
        default=None, validation_alias="LOG_LEVEL_NORMALIZATION"
    )
    log_level_replay: Optional[LogLevel] = Field(default=None, validation_alias="LOG_LEVEL_REPLAY")

    # =========================
    # Base de datos (PostgreSQL)
    # =========================
    db_user: str = Field(default="postgres", validation_alias="DB_USER")
    db_password: SecretStr = Field(default=SecretStr("postgres"), validation_alias="DB_PASSWORD")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="analytics", validation_alias="DB_NAME")
    db_echo_sql: bool = Field(default=False, validation_alias="DB_ECHO_SQL")
    db_sslmode: str = Field(default="prefer", validation_alias="DB_SSLMODE")  # prefer|require|disable
    db_url: Optional[str] = Field(default=None, validation_alias="DB_URL")
    db_connect_timeout_s: float = Field(default=5.0, validation_alias="DB_CONNECT_TIMEOUT_S")
    db_command_timeout_s: float = Field(default=30.0, validation_alias="DB_COMMAND_TIMEOUT_S")

    @property
    def database_url(self) -> str:
        """
        Genera la URL de conexión completa para SQLAlchemy + asyncpg.
        Prioriza DB_URL si existe, sino construye desde componentes individuales.

        asyncpg no acepta `sslmode` en la URL; el modo TLS se pasa en
        connect_args (ver database.build_engine).

        Lleva la contraseña en claro: queda fuera de repr() y de model_dump().
        """
        from urllib.parse import quote_plus

        if self.db_url:
            url = self.db_url
            if url.startswith("postgres://"):
                url = "postgresql+asyncpg://" + url[len("postgres://"):]
            elif url.startswith("postgresql://"):
                url = "postgresql+asyncpg://" + url[len("postgresql://"):]
            return url

        pw = quote_plus(self.db_password.get_secret_value())
        return (
            f"postgresql+asyncpg://{self.db_user}:{pw}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # =========================
    # Replay histórico (backfill)
    # =========================
    replay_batch_size: int = Field(default=1000, validation_alias="REPLAY_BATCH_SIZE")
    replay_max_batch_size: int = Field(default=10000, validation_alias="REPLAY_MAX_BATCH_SIZE")
    replay_progress_every: int = Field(
        default=10,
        validation_alias="REPLAY_PROGRESS_EVERY",
        description="Cada cuántos lotes se emite un log de progreso",
    )

    # =========================
    # Normalización
    # =========================
    normalization_default_currency: str = Field(
        default="ARS", validation_alias="NORMALIZATION_DEFAULT_CURRENCY"
    )

    # =========================
    # Helpers
    # =========================
    @property
    def is_prod(self) -> bool:
        return self.python_env == "production"

    @property
    def is_dev(self) -> bool:
        return self.python_env == "development"

    @property
    def is_test(self) -> bool:
        return self.python_env == "test"

    def _consistency_checks(self) -> None:
        """
        Validaciones mínimas de coherencia.
        Se invoca desde config_loader tras instanciar el settings.
        """
        import logging
        logger = logging.getLogger(__name__)

        if self.replay_batch_size < 1:
            raise ValueError("REPLAY_BATCH_SIZE debe ser ≥ 1")
        if self.replay_max_batch_size < self.replay_batch_size:
            raise ValueError("REPLAY_MAX_BATCH_SIZE debe ser ≥ REPLAY_BATCH_SIZE")
        if self.replay_progress_every < 1:
            raise ValueError("REPLAY_PROGRESS_EVERY debe ser ≥ 1")
        if len(self.normalization_default_currency) != 3:
            raise ValueError("NORMALIZATION_DEFAULT_CURRENCY debe ser un código ISO de 3 letras")

        # SSL requerido en prod
        if self.is_prod and self.db_sslmode != "require":
            raise ValueError("DB_SSLMODE debe ser 'require' en producción")

        if self.is_dev and self.db_password.get_secret_value() == "postgres":
            logger.info("ℹ️ DB_PASSWORD usa el valor por defecto - solo válido en desarrollo local")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


__all__ = ["BaseAppSettings", "EnvName", "LogLevel", "LogFormat"]
# Fin del archivo analytics/shared/config/settings_base.py
