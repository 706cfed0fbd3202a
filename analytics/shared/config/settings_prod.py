# -*- coding: utf-8 -*-
"""
analytics/shared/config/settings_prod.py

Overrides para entorno de PRODUCCIÓN usando Pydantic v2.
Fuerza lectura solo desde variables de entorno / secret stores,
activa logging estable (INFO en JSON) y defaults seguros.

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings, LogFormat, LogLevel


class ProdSettings(BaseAppSettings):
    # --- Logging en prod: nivel estable y formato estructurado ---
    log_level: LogLevel = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: LogFormat = Field(default="json", validation_alias="LOG_FORMAT")

    # --- Base de datos ---
    db_sslmode: str = Field(default="require", validation_alias="DB_SSLMODE")

    model_config = SettingsConfigDict(
        env_file=None,  # No leemos .env en producción
        extra="ignore",
    )


__all__ = ["ProdSettings"]
# Fin del archivo analytics/shared/config/settings_prod.py
