# -*- coding: utf-8 -*-
"""
analytics/shared/config/logging_config.py

Logging del motor de normalización.

- plain/pretty: una línea por registro, pensado para la terminal del operador.
- json: python-json-logger con el nombre del servicio como campo fijo, para
  que los logs del replay se puedan filtrar en el agregador.

El motor loguea una línea DEBUG por cada escritura normalizada; en un replay
de miles de eventos eso se controla con niveles propios por módulo
(LOG_LEVEL_NORMALIZATION / LOG_LEVEL_REPLAY) sin tocar el nivel raíz.

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

import logging.config
from typing import Literal, Optional

Level = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Loggers con nivel configurable de forma independiente
NORMALIZATION_LOGGER = "analytics.modules.normalization.handlers"
REPLAY_LOGGER = "analytics.modules.normalization.services.replay_service"


def build_logging_config(
    level: Level = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain",
    *,
    normalization_level: Optional[Level] = None,
    replay_level: Optional[Level] = None,
    service_name: str = "analytics-normalizer",
) -> dict:
    """Arma el dict para `logging.config.dictConfig` (separado para poder testearlo)."""
    use_json = fmt == "json"

    loggers: dict = {
        # El SQL lo controla DB_ECHO_SQL
        "sqlalchemy.engine": {"level": "WARNING"},
    }
    if normalization_level:
        loggers[NORMALIZATION_LOGGER] = {"level": normalization_level.upper()}
    if replay_level:
        loggers[REPLAY_LOGGER] = {"level": replay_level.upper()}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s]: %(message)s",
                "datefmt": "%H:%M:%S",
            },
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "rename_fields": {"levelname": "level", "name": "logger"},
                "static_fields": {"service": service_name},
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if use_json else "default",
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": loggers,
        "root": {
            "handlers": ["console"],
            "level": level.upper(),
        },
    }


def setup_logging(
    level: Level = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain",
    *,
    normalization_level: Optional[Level] = None,
    replay_level: Optional[Level] = None,
    service_name: str = "analytics-normalizer",
) -> None:
    """
    Configura el logging del proceso.

    Ejemplos:
        >>> setup_logging("INFO", "plain")
        >>> setup_logging("DEBUG", "json", normalization_level="WARNING")
    """
    logging.config.dictConfig(
        build_logging_config(
            level,
            fmt,
            normalization_level=normalization_level,
            replay_level=replay_level,
            service_name=service_name,
        )
    )


__all__ = ["setup_logging", "build_logging_config", "NORMALIZATION_LOGGER", "REPLAY_LOGGER"]
# Fin del archivo analytics/shared/config/logging_config.py
