# -*- coding: utf-8 -*-
"""
analytics/shared/config/settings_dev.py

Overrides para entorno de DESARROLLO (dev) usando Pydantic v2.
Hereda de BaseAppSettings y ajusta únicamente valores específicos
del ambiente local de desarrollo.

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings, LogFormat, LogLevel


class DevSettings(BaseAppSettings):
    """Configuración para entorno de desarrollo."""

    # Logging
    log_level: LogLevel = Field(default="DEBUG", validation_alias="LOG_LEVEL")
    log_format: LogFormat = Field(default="plain", validation_alias="LOG_FORMAT")

    # Base de datos: en desarrollo no se requiere SSL
    db_sslmode: str = Field(default="disable", validation_alias="DB_SSLMODE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["DevSettings"]
# Fin del archivo analytics/shared/config/settings_dev.py
