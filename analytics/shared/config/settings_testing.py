# -*- coding: utf-8 -*-
"""
analytics/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Busca ser determinista: logging moderado, base de datos aislada
y lotes de replay pequeños.

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings, LogFormat, LogLevel


class EnvTestingSettings(BaseAppSettings):
    # --- Logging en test: menos ruido ---
    log_level: LogLevel = Field(default="WARNING", validation_alias="LOG_LEVEL")
    log_format: LogFormat = Field(default="pretty", validation_alias="LOG_FORMAT")

    # --- Base de datos: usar DB separada para pruebas ---
    db_name: str = Field(default="analytics_test", validation_alias="DB_NAME")
    db_sslmode: str = Field(default="disable", validation_alias="DB_SSLMODE")

    # --- Replay: lotes chicos para ejercitar la paginación ---
    replay_batch_size: int = Field(default=100, validation_alias="REPLAY_BATCH_SIZE")

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo analytics/shared/config/settings_testing.py
