# -*- coding: utf-8 -*-
"""
analytics/shared/config/config_loader.py

Carga dinámica de configuración según PYTHON_ENV.
Ejecuta validaciones de coherencia y cachea la instancia (singleton).

Autor: Equipo Analytics
Fecha: 2025-11-03
"""

from functools import lru_cache
import os

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_testing import EnvTestingSettings
from .settings_prod import ProdSettings


def load_settings() -> BaseAppSettings:
    """
    Construye (sin cachear) la configuración apropiada según PYTHON_ENV.

    Raises:
        ValueError: Si las validaciones de coherencia fallan
    """
    env = os.getenv("PYTHON_ENV", "development").lower()

    if env == "production":
        settings = ProdSettings()
    elif env == "test":
        settings = EnvTestingSettings()
    else:
        settings = DevSettings()

    settings._consistency_checks()
    return settings


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Devuelve la configuración del entorno actual, cacheada como singleton.

    Returns:
        BaseAppSettings: Instancia de configuración para el entorno actual
    """
    return load_settings()


__all__ = ["get_settings", "load_settings"]
# Fin del archivo analytics/shared/config/config_loader.py
